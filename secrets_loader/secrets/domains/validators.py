"""Validation of secret records."""
from .errors import ValidationError
from .models import SecretRecord


def validate_record(record: SecretRecord) -> None:
    """
    Validate that a record carries both a name and a value.

    Secret services do not allow empty names or empty secret payloads, so
    such records are rejected before anything is sent.

    Args:
        record: Record decoded from the input file

    Raises:
        ValidationError: If name or value is empty
    """
    prefix = f"line {record.line}: " if record.line else ""

    if not record.name:
        raise ValidationError(f"{prefix}empty secret name")

    if not record.value:
        raise ValidationError(f"{prefix}empty secret value")
