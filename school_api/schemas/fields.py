# school_api/schemas/fields.py
"""Field helpers shared by the partial-update schemas."""
from pydantic import field_validator


def reject_null(*fields: str):
    """Validator refusing an explicit ``null`` for columns that cannot be NULL.

    Omitted fields keep their default and are never validated, so leaving a
    field out of a PATCH body still means "unchanged".
    """
    def check(cls, value):
        if value is None:
            raise ValueError("Field may be omitted but not set to null")
        return value

    return field_validator(*fields)(check)
