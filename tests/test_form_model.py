"""Tests for the form model."""

import pytest

from pyqt_formdelegates.forms.form_model import FormModel
from pyqt_formdelegates.validation import MandatoryValidator, IntValidator


def test_values_and_defaults():
    """Fields start at their defaults and reset back to them."""
    model = FormModel(["title", "count"], defaults={"count": 3})
    assert model.fields() == ["title", "count"]
    assert model.value("title") is None
    assert model.value("count") == 3

    model.set_value("count", 5)
    assert model.values() == {"title": None, "count": 5}

    model.reset()
    assert model.value("count") == 3


def test_unknown_field_fails_loud():
    """Unknown field names raise KeyError listing the known fields."""
    model = FormModel(["title"])
    with pytest.raises(KeyError, match="title"):
        model.value("missing")
    with pytest.raises(KeyError):
        model.set_value("missing", 1)


def test_field_without_validator_is_valid():
    """Validator absence is a normal outcome."""
    model = FormModel(["title"])
    assert model.validator("title") is None
    assert model.validate_field("title")
    assert model.is_valid("title")


def test_validate_collects_results():
    """validate() runs every validator and stores each result."""
    model = FormModel(["title", "count"])
    model.set_validator("title", MandatoryValidator())
    model.set_validator("count", IntValidator(0, 10))
    model.set_value("count", 4)

    assert not model.validate()
    assert model.validation("title").message == "This field cannot be empty"
    assert model.is_valid("count")


def test_set_value_clears_validation():
    """Changing a value invalidates the previous validation result."""
    model = FormModel(["title"])
    model.set_validator("title", MandatoryValidator())
    model.validate_field("title")
    assert model.is_validated("title")

    model.set_value("title", "Hello")
    assert not model.is_validated("title")


def test_validator_is_shared_instance():
    """The model stores the validator object it was given."""
    validator = MandatoryValidator()
    model = FormModel(["title"])
    model.set_validator("title", validator)
    assert model.validator("title") is validator

    model.set_validator("title", None)
    assert model.validator("title") is None


def test_set_validation_records_external_result():
    """Results from checks outside the validator are stored like any other."""
    from pyqt_formdelegates.validation import ValidationResult

    model = FormModel(["username"])
    model.set_validation("username", ValidationResult.invalid("Name already taken"))
    assert model.is_validated("username")
    assert not model.is_valid("username")
    assert model.validation("username").message == "Name already taken"

    model.set_value("username", "other")
    assert model.validation("username") is None

    with pytest.raises(KeyError):
        model.set_validation("missing", ValidationResult.valid())


def test_remove_field():
    """Removed fields drop their value, default and validator."""
    model = FormModel(["title", "count"])
    model.set_validator("title", MandatoryValidator())
    model.remove_field("title")

    assert model.fields() == ["count"]
    assert not model.has_field("title")
    with pytest.raises(KeyError):
        model.remove_field("title")
