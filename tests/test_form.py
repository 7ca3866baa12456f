"""
Form lifecycle tests without a schema: construction, derived flags, reset,
field updates, custom validation functions and the submit pipeline.
"""

import pytest
from pydantic import ValidationError

from starform import ChangeEvent, Form, FormConfig, FormState, InputElement
from starform.reactivity import Derived, Writable, get
from starform.validation import CustomValidator, NoValidator


def invalid_email(values):
    if values.get("email") == "invalid.email":
        return {"email": "this email is invalid"}
    return None


class TestConstruction:
    def test_stores_are_initialized(self, initial_values):
        form = Form(initial_values=initial_values)

        assert get(form.form) == initial_values
        assert get(form.errors) == {"name": "", "email": "", "country": ""}
        assert get(form.touched) == {"name": False, "email": False, "country": False}
        assert get(form.modified) == {"name": False, "email": False, "country": False}
        assert get(form.is_valid) is False
        assert get(form.is_modified) is False
        assert get(form.is_submitting) is False
        assert get(form.is_validating) is False

    def test_accepts_config_object(self, initial_values):
        form = Form(FormConfig(initial_values=initial_values, validate=invalid_email))

        assert isinstance(form.validator, CustomValidator)

    def test_config_and_keywords_are_exclusive(self, initial_values):
        with pytest.raises(TypeError):
            Form(FormConfig(initial_values=initial_values), on_submit=print)

    def test_config_rejects_unsupported_values(self):
        with pytest.raises(ValidationError):
            FormConfig(initial_values={"age": 3})

    def test_config_is_frozen(self, initial_values):
        config = FormConfig(initial_values=initial_values)

        with pytest.raises(ValidationError):
            config.on_submit = print

    def test_empty_initial_values_warns(self, caplog):
        form = Form(initial_values={})

        assert "initial_values need to be a non empty mapping" in caplog.text
        assert get(form.form) == {}

    def test_initial_snapshot_is_not_aliased(self):
        values = {"name": "a"}
        form = Form(initial_values=values)

        values["name"] = "b"
        form.form.get()["name"] = "c"
        form.handle_reset()

        assert get(form.form) == {"name": "a"}
        assert form.initial_values == {"name": "a"}

    def test_derived_stores_are_read_only(self, initial_values):
        form = Form(initial_values=initial_values)

        for store in (form.is_valid, form.modified, form.is_modified, form.state):
            assert isinstance(store, Derived)
            assert not isinstance(store, Writable)

    def test_resolves_no_validator(self, initial_values):
        assert isinstance(Form(initial_values=initial_values).validator, NoValidator)


class TestDerivedState:
    def test_valid_requires_every_field_touched(self, initial_values):
        form = Form(initial_values=initial_values)

        form.update_touched("name", True)
        form.update_touched("email", True)
        assert get(form.is_valid) is False

        form.update_touched("country", True)
        assert get(form.is_valid) is True

    def test_any_error_invalidates(self, initial_values):
        form = Form(initial_values=initial_values)
        for field in initial_values:
            form.update_touched(field, True)

        form.errors.update(lambda errors: {**errors, "name": "name is required"})

        assert get(form.is_valid) is False

    def test_modified_tracks_difference_from_initial(self, initial_values):
        form = Form(initial_values=initial_values)

        form.update_field("name", "foo")

        assert get(form.modified) == {"name": True, "email": False, "country": False}
        assert get(form.is_modified) is True

    def test_modified_clears_when_value_returns(self):
        form = Form(initial_values={"name": "foo"})

        form.update_field("name", "bar")
        form.update_field("name", "foo")

        assert get(form.is_modified) is False

    def test_state_snapshot(self, initial_values):
        form = Form(initial_values=initial_values)
        snapshots = []
        form.state.subscribe(snapshots.append)

        form.update_field("email", "a@b.com")

        state = snapshots[-1]
        assert isinstance(state, FormState)
        assert state.form["email"] == "a@b.com"
        assert state.modified["email"] is True
        assert state.is_modified is True
        assert state.to_dict()["errors"] == {"name": "", "email": "", "country": ""}

    def test_state_is_consistent_during_reset(self, initial_values):
        form = Form(initial_values=initial_values)
        for field in initial_values:
            form.update_touched(field, True)
        form.update_field("name", "foo")
        snapshots = []
        form.state.subscribe(snapshots.append)

        form.handle_reset()

        for state in snapshots[1:]:
            assert state.form == initial_values
            assert not any(state.touched.values())
            assert state.is_valid is False
            assert state.is_modified is False


class TestReset:
    def test_restores_values_errors_and_touched(self, initial_values):
        form = Form(initial_values=initial_values)
        form.update_field("name", "foo")
        form.update_touched("name", True)
        form.errors.update(lambda errors: {**errors, "name": "name is required"})

        form.handle_reset()

        assert get(form.form) == initial_values
        assert get(form.errors)["name"] == ""
        assert get(form.touched)["name"] is False
        assert get(form.is_modified) is False

    def test_is_idempotent(self, initial_values):
        form = Form(initial_values=initial_values)
        form.update_field("email", "x@y.z")

        form.handle_reset()
        first = (get(form.form), get(form.errors), get(form.touched))
        form.handle_reset()

        assert (get(form.form), get(form.errors), get(form.touched)) == first

    def test_update_initial_values_resets_to_new_snapshot(self, initial_values):
        form = Form(initial_values=initial_values)
        form.update_field("name", "typed")

        form.update_initial_values({"name": "Ada", "email": "ada@example.com", "country": "UK"})

        assert get(form.form) == {"name": "Ada", "email": "ada@example.com", "country": "UK"}
        assert get(form.is_modified) is False

        form.update_field("name", "Grace")
        form.handle_reset()
        assert get(form.form)["name"] == "Ada"

    def test_update_initial_values_rejects_empty(self, initial_values, caplog):
        form = Form(initial_values=initial_values)
        form.update_field("name", "typed")

        form.update_initial_values({})

        assert get(form.form)["name"] == "typed"
        assert "initial_values need to be a non empty mapping" in caplog.text


class TestFieldUpdates:
    def test_update_field_has_no_side_effects(self, initial_values):
        form = Form(initial_values=initial_values)

        form.update_field("name", "foo")

        assert get(form.form)["name"] == "foo"
        assert get(form.touched)["name"] is False
        assert get(form.errors)["name"] == ""

    def test_absent_values_are_not_written(self):
        form = Form(initial_values={"name": "foo"})

        form.update_field("name", None)
        form.update_field("name", "")

        assert get(form.form)["name"] == "foo"

    def test_false_is_written(self):
        form = Form(initial_values={"terms": True})

        form.update_field("terms", False)

        assert get(form.form)["terms"] is False

    @pytest.mark.asyncio
    async def test_update_validate_field_without_validator(self, initial_values):
        form = Form(initial_values=initial_values)
        pulses = []
        form.is_validating.subscribe(pulses.append)

        await form.update_validate_field("email", "a@b.com")

        assert get(form.form)["email"] == "a@b.com"
        assert get(form.touched)["email"] is True
        assert get(form.errors)["email"] == ""
        assert pulses == [False]

    @pytest.mark.asyncio
    async def test_update_validate_field_with_function(self):
        form = Form(initial_values={"email": ""}, validate=invalid_email)

        await form.update_validate_field("email", "invalid.email")
        assert get(form.errors)["email"] == "this email is invalid"

        await form.update_validate_field("email", "good@x.com")
        assert get(form.errors)["email"] == ""

    @pytest.mark.asyncio
    async def test_function_returning_none_clears_error(self):
        form = Form(initial_values={"email": ""}, validate=lambda values: None)
        form.errors.set({"email": "stale"})

        await form.update_validate_field("email", "x")

        assert get(form.errors)["email"] == ""

    @pytest.mark.asyncio
    async def test_validating_flag_pulses(self):
        form = Form(initial_values={"email": ""}, validate=invalid_email)
        pulses = []
        form.is_validating.subscribe(pulses.append)

        await form.update_validate_field("email", "invalid.email")

        assert pulses == [False, True, False]

    @pytest.mark.asyncio
    async def test_validate_field_uses_current_value(self):
        form = Form(initial_values={"email": "invalid.email"}, validate=invalid_email)

        await form.validate_field("email")

        assert get(form.form)["email"] == "invalid.email"
        assert get(form.touched)["email"] is True
        assert get(form.errors)["email"] == "this email is invalid"

    @pytest.mark.asyncio
    async def test_handle_change_with_text_input(self, initial_values):
        form = Form(initial_values=initial_values)

        await form.handle_change(ChangeEvent(target=InputElement(name="email", value="a@b.com")))

        assert get(form.form)["email"] == "a@b.com"
        assert get(form.touched)["email"] is True

    @pytest.mark.asyncio
    async def test_handle_change_with_checkbox(self):
        form = Form(initial_values={"terms": False})

        await form.handle_change({"target": InputElement(name="terms", type="checkbox", checked=True)})

        assert get(form.form)["terms"] is True

    @pytest.mark.asyncio
    async def test_handle_change_without_target_does_nothing(self, initial_values):
        form = Form(initial_values=initial_values)

        await form.handle_change(ChangeEvent(target=None))

        assert get(form.form) == initial_values


class TestSubmit:
    @pytest.mark.asyncio
    async def test_without_validator_submits(self, initial_values, submissions):
        form = Form(initial_values=initial_values, on_submit=submissions)

        await form.handle_submit()

        assert len(submissions.calls) == 1
        values, form_store, errors_store = submissions.calls[0]
        assert values == initial_values
        assert form_store is form.form
        assert errors_store is form.errors
        assert get(form.is_submitting) is False

    @pytest.mark.asyncio
    async def test_without_callback_clears_errors(self, initial_values):
        form = Form(initial_values=initial_values)
        form.errors.set({"name": "stale", "email": "", "country": ""})

        await form.handle_submit()

        assert get(form.errors) == {"name": "", "email": "", "country": ""}

    @pytest.mark.asyncio
    async def test_function_rejection_blocks_submit(self, submissions):
        form = Form(initial_values={"name": "", "email": "invalid.email"}, validate=invalid_email, on_submit=submissions)
        form.errors.set({"name": "stale", "email": ""})

        await form.handle_submit()

        assert submissions.calls == []
        assert get(form.errors) == {"name": "", "email": "this email is invalid"}
        assert get(form.is_submitting) is False

    @pytest.mark.asyncio
    async def test_function_receives_whole_form(self, initial_values):
        received = []
        form = Form(initial_values=initial_values, validate=lambda values: received.append(values))

        await form.handle_submit()

        assert received == [initial_values]

    @pytest.mark.asyncio
    async def test_errors_for_extra_fields_are_kept(self, submissions):
        form = Form(initial_values={"name": ""}, validate=lambda values: {"ghost": "boo"}, on_submit=submissions)

        await form.handle_submit()

        assert submissions.calls == []
        assert get(form.errors) == {"name": "", "ghost": "boo"}
        assert get(form.is_valid) is False

        form.handle_reset()
        assert get(form.errors) == {"name": ""}

    @pytest.mark.asyncio
    async def test_prevent_default_is_called(self, initial_values):
        class Event:
            prevented = False

            def prevent_default(self):
                self.prevented = True

        event = Event()
        await Form(initial_values=initial_values).handle_submit(event)

        assert event.prevented

    @pytest.mark.asyncio
    async def test_async_callback_is_awaited(self, initial_values):
        seen = []

        async def on_submit(values, form, errors):
            seen.append(values)

        await Form(initial_values=initial_values, on_submit=on_submit).handle_submit()

        assert seen == [initial_values]

    @pytest.mark.asyncio
    async def test_submitting_flag_sequence(self, initial_values):
        form = Form(initial_values=initial_values, validate=lambda values: None)
        flags = []
        form.is_submitting.subscribe(flags.append)

        await form.handle_submit()

        assert flags == [False, True, False]

    @pytest.mark.asyncio
    async def test_validator_fault_propagates_and_releases_flags(self, initial_values, submissions):
        def broken(values):
            raise RuntimeError("validator exploded")

        form = Form(initial_values=initial_values, validate=broken, on_submit=submissions)

        with pytest.raises(RuntimeError):
            await form.handle_submit()

        assert submissions.calls == []
        assert get(form.is_submitting) is False
        assert get(form.is_validating) is False
