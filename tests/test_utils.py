"""Tests for the core helpers."""

import pytest

from starform.core import assign, clone_values, subscribe_once
from starform.reactivity import writable


def test_clone_values_copies():
    values = {"name": "a", "terms": True, "note": None}

    copy = clone_values(values)
    copy["name"] = "b"

    assert values["name"] == "a"
    assert copy == {"name": "b", "terms": True, "note": None}


def test_clone_values_rejects_other_types():
    with pytest.raises(TypeError):
        clone_values({"tags": ["a"]})


def test_assign():
    assert assign({"a": "x", "b": "y"}, "") == {"a": "", "b": ""}


@pytest.mark.asyncio
async def test_subscribe_once_resolves_and_unsubscribes():
    store = writable({"name": "a"})

    value = await subscribe_once(store)

    assert value == {"name": "a"}
    assert store.subscriber_count == 0
