"""Error handling utilities."""

from typing import Optional


class EquipCareError(Exception):
    """Base exception for EquipCare Hub."""
    pass


class FormValidationError(EquipCareError):
    """Form data failed schema validation; nothing was persisted."""

    def __init__(self, field_errors: dict[str, list[str]], message: Optional[str] = None):
        self.field_errors = field_errors
        if message is None:
            fields = ", ".join(sorted(field_errors)) or "form"
            message = f"Invalid value for: {fields}"
        super().__init__(message)


class RecordStoreError(EquipCareError):
    """Record store write or serialization error."""
    pass


class RecordNotFoundError(EquipCareError):
    """No record with the requested id exists in the collection."""

    def __init__(self, collection: str, record_id: str):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"Record {record_id!r} not found in {collection}")


class ExportError(EquipCareError):
    """PDF export request could not be served."""
    pass
