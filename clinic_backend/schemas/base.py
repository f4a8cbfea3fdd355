from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake-case attributes, camelCase JSON on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        coerce_numbers_to_str=True,
    )


class UpdateModel(CamelModel):
    """Partial update body. Unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")

    def changes(self) -> dict:
        """Fields the caller actually supplied."""
        return self.model_dump(exclude_unset=True)


class DeleteResponse(BaseModel):
    success: bool = True
