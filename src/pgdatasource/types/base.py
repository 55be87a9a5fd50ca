"""Base model for pgdatasource value objects."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class PGDSBaseModel(BaseModel):
    """Immutable pydantic model with plain-dict serialization.

    Results, filters and attribute declarations are built once and only
    read afterwards. Unknown fields are rejected so a misspelled filter
    name fails loudly instead of being ignored.
    """
    model_config = ConfigDict(
        use_enum_values=True,
        frozen=True,
        extra="forbid",
    )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-compatible dictionary in field declaration order.

        Nested models become dicts, enums their values, and list order
        is preserved.
        """
        return self.model_dump(mode="json", exclude_none=True)
