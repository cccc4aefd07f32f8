"""Pydantic-backed structured schemas."""

from typing import Any

from pydantic import TypeAdapter


class PydanticSchema[T]:
    """StructuredSchema validating input against a pydantic model or type.

    ``parse`` raises ``pydantic.ValidationError`` on invalid input.
    """

    def __init__(self, type_: type[T] | Any):
        self._adapter: TypeAdapter[T] = TypeAdapter(type_)

    def parse(self, value: Any) -> T:
        return self._adapter.validate_python(value)


def from_pydantic[T](type_: type[T]) -> PydanticSchema[T]:
    """Create a StructuredSchema from a pydantic model (or any type pydantic understands).

    Example:
        class Answer(BaseModel):
            result: float

        result = await agent.run(messages, expect=from_pydantic(Answer))
    """
    return PydanticSchema(type_)
