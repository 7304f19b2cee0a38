"""Shared fixtures for the object model test suite."""

from __future__ import annotations

import re

import pytest

from object_model import ModelSettings, ObjectModel, log_errors


@pytest.fixture
def collected() -> list:
    """Error batches handed to a non-raising reporting strategy."""
    return []


@pytest.fixture
def collecting_settings(collected: list) -> ModelSettings:
    return ModelSettings(error_collector=collected.append)


@pytest.fixture
def logging_settings() -> ModelSettings:
    return ModelSettings(error_collector=log_errors)


@pytest.fixture
def person_model() -> ObjectModel:
    return ObjectModel(
        {
            "name": re.compile(r"^[A-Za-z]+$"),
            "age": float,
            "address": {"city": str, "zip": [str]},
        },
        name="Person",
    )
