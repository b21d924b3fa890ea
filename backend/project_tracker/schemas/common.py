"""
Shared Pydantic building blocks for forms and partial updates.
"""

from typing import Any

from pydantic import BaseModel, model_validator


def is_blank(value: Any) -> bool:
    """True for strings that are empty or whitespace only."""
    return isinstance(value, str) and not value.strip()


class PartialUpdate(BaseModel):
    """
    Base for update schemas with "leave blank to keep" semantics.
    
    A field that is not passed, or passed as a blank string, stays unset and
    means "unchanged". A field explicitly passed as None means "clear"
    where the column allows it. Use ``model_dump(exclude_unset=True)`` to get
    the requested changes.
    """
    
    @model_validator(mode="before")
    @classmethod
    def drop_blank_fields(cls, data: Any) -> Any:
        """Treat blank strings as if the field had not been supplied."""
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if not is_blank(value)}
        return data
