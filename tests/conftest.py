"""Shared fixtures for the StarForm test suite."""

import pytest


@pytest.fixture
def initial_values():
    return {"name": "", "email": "", "country": ""}


@pytest.fixture
def submissions():
    """Records every on_submit call as (values, form store, errors store)"""
    calls = []

    def on_submit(values, form, errors):
        calls.append((values, form, errors))

    on_submit.calls = calls
    return on_submit
