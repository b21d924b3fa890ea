"""
Base service class.
Services contain business logic and coordinate repositories.
"""

from abc import ABC
from typing import Any, Dict, Iterable, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from project_tracker.core.exceptions import InvalidFormError
from project_tracker.core.logging import get_logger

SchemaType = TypeVar("SchemaType", bound=BaseModel)

logger = get_logger(__name__)


class BaseService(ABC):
    """Base service class for all services."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _parse(
        schema: Type[SchemaType],
        data: Optional[Union[SchemaType, Mapping[str, Any]]],
    ) -> SchemaType:
        """
        Accept a schema instance or a plain mapping and return a validated schema.

        Raises:
            InvalidFormError: when data is missing or fails validation
        """
        if data is None:
            raise InvalidFormError(f"{schema.__name__} is missing")
        if isinstance(data, schema):
            return data
        try:
            return schema.model_validate(data)
        except ValidationError as e:
            raise InvalidFormError(
                f"{schema.__name__} is invalid",
                details=e.errors(include_url=False),
            ) from e

    @staticmethod
    def _drop_cleared(changes: Dict[str, Any], required: Iterable[str]) -> Dict[str, Any]:
        """Required columns cannot be cleared; a None for them means unchanged."""
        for field in required:
            if field in changes and changes[field] is None:
                del changes[field]
        return changes

    @staticmethod
    def _apply_changes(entity: Any, changes: Mapping[str, Any]) -> bool:
        """
        Set every changed attribute on the entity.

        Returns:
            True if at least one attribute ended up with a different value
        """
        has_changes = False
        for field, value in changes.items():
            if getattr(entity, field) != value:
                setattr(entity, field, value)
                has_changes = True
        return has_changes

    async def _rollback(self) -> None:
        """Discard the failed transaction so the session stays usable."""
        try:
            await self.session.rollback()
        except Exception as e:
            logger.error(f"Rollback failed: {e}", exc_info=True)
