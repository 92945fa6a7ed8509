"""Schema validation utilities using the package-data registry."""

from typing import Any

from jsonschema.validators import Draft202012Validator

from riskgate.utils.schema_registry import get_registry


def _format_errors(validator: Draft202012Validator, data: Any) -> list[str]:
    return [
        f"{'.'.join(str(p) for p in e.path)}: {e.message}" if e.path else e.message
        for e in sorted(validator.iter_errors(data), key=lambda err: list(err.path))
    ]


def get_validator(schema_name: str) -> Draft202012Validator:
    """Build a validator for a packaged schema."""
    return Draft202012Validator(get_registry().get_json(schema_name))


def validate_data(
    data: Any,
    schema_name: str,
    strict: bool = True,
) -> tuple[bool, list[str]]:
    """Validate data against a schema from package data.

    Args:
        data: Data to validate
        schema_name: Name of schema to validate against
        strict: If True, raise on validation errors; if False, return error list

    Returns:
        Tuple of (is_valid, error_messages)

    Raises:
        KeyError: If schema not found in package data
        ValueError: If validation fails and strict=True
    """
    error_messages = _format_errors(get_validator(schema_name), data)

    if error_messages:
        if strict:
            raise ValueError(
                f"Schema validation failed for '{schema_name}':\n"
                + "\n".join(f"  - {msg}" for msg in error_messages)
            )
        return False, error_messages

    return True, []
