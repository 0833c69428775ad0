"""
Tests for the error types.
"""

import pytest

from apivalidation import BindingError, FieldError, SchemaError, ValidationErrors


class TestFieldError:
    def test_compares_to_message(self):
        err = FieldError("cannot be blank", "validation_required")
        assert err == "cannot be blank"
        assert err == FieldError("cannot be blank")
        assert str(err) == "cannot be blank"
        assert isinstance(err, ValueError)


class TestValidationErrors:
    def _errors(self):
        return ValidationErrors({
            "title": FieldError("cannot be blank"),
            "fees": ValidationErrors({
                "1": ValidationErrors({"payment_type": FieldError("cannot be blank")}),
            }),
        })

    def test_str_sorted(self):
        assert str(self._errors()) == (
            "fees: (1: (payment_type: cannot be blank.).); title: cannot be blank."
        )

    def test_mapping(self):
        errors = self._errors()
        assert len(errors) == 2
        assert set(errors) == {"title", "fees"}
        assert errors["fees"]["1"]["payment_type"] == "cannot be blank"

    def test_to_dict(self):
        assert self._errors().to_dict() == {
            "fees": {"1": {"payment_type": "cannot be blank"}},
            "title": "cannot be blank",
        }

    def test_raisable(self):
        with pytest.raises(ValueError, match="title: cannot be blank."):
            raise ValidationErrors({"title": FieldError("cannot be blank")})

    def test_empty(self):
        errors = ValidationErrors()
        assert not errors
        assert str(errors) == ""


class TestConfigurationErrors:
    def test_hierarchy(self):
        assert issubclass(BindingError, TypeError)
        assert issubclass(SchemaError, ValueError)
