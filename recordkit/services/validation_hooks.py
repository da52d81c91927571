"""Schema Validation Hooks - pydantic-backed listener for the validate event.

Invariants:
    - Acts on LifecycleEvent.VALIDATE only; every other event is ignored
    - A rejected record raises RecordValidationError before any primitive runs
    - coerce=True merges the validated dump (defaults, coerced types) back
      into the record before it is persisted
"""

from typing import TYPE_CHECKING

from pydantic import BaseModel, ValidationError

from recordkit.core.domain_types import LifecycleEvent
from recordkit.core.errors import ErrorContext, RecordValidationError
from recordkit.core.repository_protocols import HookFactory

if TYPE_CHECKING:
    from recordkit.core.lifecycle import BaseRecord


class SchemaValidationHooks:
    def __init__(
        self, record: "BaseRecord", schema: type[BaseModel], coerce: bool = True,
    ):
        self.record = record
        self.schema = schema
        self.coerce = coerce

    async def emit(self, event: LifecycleEvent) -> None:
        if event != LifecycleEvent.VALIDATE:
            return
        try:
            validated = self.schema.model_validate(self.record.snapshot())
        except ValidationError as e:
            raise RecordValidationError(
                f"{self.record.table_name} record failed {self.schema.__name__} validation",
                errors=[
                    {
                        "field": ".".join(str(loc) for loc in err["loc"]),
                        "message": err["msg"],
                        "type": err["type"],
                    }
                    for err in e.errors()
                ],
                context=ErrorContext(
                    table_name=self.record.table_name, record_id=self.record.id,
                ),
            ) from e
        if self.coerce:
            self.record.set(validated.model_dump())


def schema_validator(schema: type[BaseModel], coerce: bool = True) -> HookFactory:
    """Hook factory validating every record of a class against schema."""
    def factory(record: "BaseRecord") -> SchemaValidationHooks:
        return SchemaValidationHooks(record, schema, coerce=coerce)
    return factory
