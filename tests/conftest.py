"""Pytest marker auto-assignment by folder, plus shared schema models."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import pytest

from schemabuilder import logger
from schemabuilder.typing.models import ClassCollection

PET_MODEL: dict[str, Any] = {
    "name": "petstore",
    "version": "v2",
    "classes": {
        "Tags": {"is_string_array": True},
        "Raw": {"is_blob": True},
        "Owner": {
            "properties": {
                "name": {"type": "string"},
                "age": {"type": "int"},
            },
            "required": ["name"],
        },
        "Pet": {
            "description": "A pet in the store.",
            "open": True,
            "required": ["name"],
            "properties": {
                "name": {"type": "string"},
                "weight": {"type": "float"},
                "vaccinated": {"type": "bool"},
                "tags": {"type": "Tags"},
                "nicknames": {"type": "string", "repeated": True},
                "scores": {"type": "int", "repeated": True},
                "owners": {"type": "Owner", "repeated": True},
                "extensions": {"type": "map<string, string>", "pattern": "^x-"},
                "notes": {"type": "Raw"},
            },
        },
        "Cat": {"properties": {"meow": {"type": "bool"}}, "required": ["meow"]},
        "Dog": {"properties": {"bark": {"type": "bool"}}, "required": ["bark"]},
        "Animal": {
            "one_of_wrapper": True,
            "open": True,
            "properties": {
                "cat": {"type": "Cat"},
                "dog": {"type": "Dog"},
            },
        },
        "Shelter": {
            "open": True,
            "properties": {
                "staff": {"type": "map<string, Owner>", "pattern": "^staff-"},
            },
        },
    },
}


@pytest.fixture
def pet_model() -> dict[str, Any]:
    """Raw payload of the sample pet store model."""
    return copy.deepcopy(PET_MODEL)


@pytest.fixture
def pet_collection(pet_model: dict[str, Any]) -> ClassCollection:
    """Validated sample pet store model."""
    return ClassCollection.model_validate(pet_model)


def _mark_tests_by_directory(
    config: pytest.Config,
    items: list[pytest.Item],
    marker: str,
) -> None:
    """Mark collected tests located under tests/<marker>/."""
    target_dir = Path(config.rootpath) / "tests" / marker
    target_dir = target_dir.resolve()

    for item in items:
        try:
            path = Path(str(item.fspath)).resolve()
        except OSError:
            logger.warning(
                f"Could not resolve path for test item {item.name!s}; skipping {marker!s} marker assignment",
            )
            continue

        if path == target_dir or target_dir in path.parents:
            item.add_marker(getattr(pytest.mark, marker))


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Apply directory-based markers to test items."""
    _mark_tests_by_directory(config, items, "unit")
    _mark_tests_by_directory(config, items, "integration")
    _mark_tests_by_directory(config, items, "end2end")
