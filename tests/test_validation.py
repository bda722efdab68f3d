"""Tests for validators."""

from datetime import date, time

import pytest

from pyqt_formdelegates.validation import (
    ValidationState, Validator, MandatoryValidator, IntValidator, DoubleValidator,
    DateValidator, TimeValidator, LengthValidator, RegExpValidator,
)


def test_validator_is_abstract():
    """The base validator cannot be used directly."""
    with pytest.raises(TypeError):
        Validator()


@pytest.mark.parametrize("empty", [None, ""])
def test_mandatory_empty_values(empty):
    """Empty values fail only when mandatory."""
    assert MandatoryValidator().validate(empty).state is ValidationState.INVALID_EMPTY
    assert MandatoryValidator(mandatory=False).validate(empty).is_valid


def test_int_validator_range():
    """Test IntValidator bounds and type check."""
    validator = IntValidator(0, 10)
    assert validator.validate(5).is_valid
    assert validator.validate("7").is_valid
    assert not validator.validate(11).is_valid
    assert not validator.validate(-1).is_valid
    assert validator.validate("seven").message == "Must be an integer number"
    assert not validator.validate(True).is_valid


def test_double_validator_open_range():
    """Test DoubleValidator with only a lower bound."""
    validator = DoubleValidator(bottom=0.5)
    assert validator.validate(0.5).is_valid
    result = validator.validate(0.25)
    assert result.state is ValidationState.INVALID
    assert "at least 0.5" in result.message


def test_date_and_time_validators():
    """Date and time validators accept values and ISO text."""
    dates = DateValidator(bottom=date(2020, 1, 1))
    assert dates.validate(date(2021, 6, 1)).is_valid
    assert dates.validate("2021-06-01").is_valid
    assert not dates.validate(date(2019, 12, 31)).is_valid
    assert not dates.validate("yesterday").is_valid

    times = TimeValidator(top=time(17, 0))
    assert times.validate(time(9, 30)).is_valid
    assert not times.validate("18:00:00").is_valid


def test_length_validator():
    """Test LengthValidator limits."""
    validator = LengthValidator(min_length=2, max_length=4)
    assert validator.validate("abc").is_valid
    assert not validator.validate("a").is_valid
    assert not validator.validate("abcde").is_valid


def test_regexp_validator_matches_whole_value():
    """RegExpValidator requires a full match."""
    validator = RegExpValidator(r"\d+", message="Digits only")
    assert validator.validate("123").is_valid
    result = validator.validate("123a")
    assert not result.is_valid
    assert result.message == "Digits only"
