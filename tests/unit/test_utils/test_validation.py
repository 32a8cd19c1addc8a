"""Tests for form validation helpers and record ids."""

import pytest
from pydantic import BaseModel, ValidationError, field_validator

from equipcare.utils.errors import EquipCareError, FormValidationError, RecordNotFoundError
from equipcare.utils.ids import generate_record_id
from equipcare.utils.validation import field_errors, parse_form


class _Form(BaseModel):
    code: str
    count: int

    @field_validator("code")
    @classmethod
    def _code_upper(cls, value: str) -> str:
        if value != value.upper():
            raise ValueError("Code must be upper case.")
        return value


@pytest.mark.unit
def test_field_errors_strip_prefix():
    with pytest.raises(ValidationError) as exc_info:
        _Form.model_validate({"code": "abc", "count": "x"})

    errors = field_errors(exc_info.value)
    assert errors["code"] == ["Code must be upper case."]
    assert len(errors["count"]) == 1


@pytest.mark.unit
def test_parse_form_raises_form_error():
    with pytest.raises(FormValidationError) as exc_info:
        parse_form(_Form, {"code": "ABC"})

    assert isinstance(exc_info.value, EquipCareError)
    assert list(exc_info.value.field_errors) == ["count"]
    assert "count" in str(exc_info.value)


@pytest.mark.unit
def test_parse_form_valid():
    assert parse_form(_Form, {"code": "ABC", "count": "3"}).count == 3


@pytest.mark.unit
def test_record_not_found_message():
    err = RecordNotFoundError("dailyTasks", "dt999")

    assert err.record_id == "dt999"
    assert "dailyTasks" in str(err)


@pytest.mark.unit
def test_generate_record_id_prefix_and_uniqueness():
    ids = {generate_record_id("dt") for _ in range(50)}

    assert len(ids) == 50
    assert all(record_id.startswith("dt") and len(record_id) == 28 for record_id in ids)


@pytest.mark.unit
def test_generate_record_id_avoids_taken(monkeypatch):
    import equipcare.utils.ids as ids_module

    values = iter(["01J00000000000000000000000", "01J00000000000000000000001"])
    monkeypatch.setattr(ids_module, "ULID", lambda: next(values))

    assert generate_record_id("wt", {"wt01J00000000000000000000000"}) == "wt01J00000000000000000000001"
