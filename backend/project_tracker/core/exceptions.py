"""
Exception taxonomy for the service layer.
Services raise these internally and translate them into boolean results
at their boundary; nothing here is meant to reach callers.
"""

from typing import Any


class AppException(Exception):
    """Base application exception."""
    def __init__(self, message: str, details: Any = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


class InvalidFormError(AppException):
    """A form was absent or could not be turned into an entity."""
    pass


class ReferenceNotFoundError(AppException):
    """A referenced entity (customer, employee, project) does not exist."""
    def __init__(self, entity: str, entity_id: Any):
        super().__init__(
            f"{entity} {entity_id} does not exist",
            details={"entity": entity, "id": entity_id},
        )
        self.entity = entity
        self.entity_id = entity_id
