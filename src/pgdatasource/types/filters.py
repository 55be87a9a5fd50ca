"""Filter inputs for the table enumeration query."""

from typing import List, Optional

from pydantic import Field, field_validator

from pgdatasource.types.base import PGDSBaseModel


class TableFilters(PGDSBaseModel):
    """Optional filters applied when enumerating tables.

    Every list is ordered and may be empty; an empty list or an empty
    regex contributes nothing to the query.

    Attributes:
        schemas: Schemas to restrict to (exact match)
        table_types: ``information_schema.tables.table_type`` values
            to restrict to, e.g. ``BASE TABLE`` or ``VIEW``
        like_any_patterns: Table name must match at least one pattern
        like_all_patterns: Table name must match every pattern
        not_like_all_patterns: Table name must match none of the patterns
        regex_pattern: POSIX regular expression the table name must match
    """
    schemas: List[str] = Field(default_factory=list)
    table_types: List[str] = Field(default_factory=list)
    like_any_patterns: List[str] = Field(default_factory=list)
    like_all_patterns: List[str] = Field(default_factory=list)
    not_like_all_patterns: List[str] = Field(default_factory=list)
    regex_pattern: str = Field(default="")

    @field_validator(
        "schemas",
        "table_types",
        "like_any_patterns",
        "like_all_patterns",
        "not_like_all_patterns",
        mode="before",
    )
    @classmethod
    def none_as_empty_list(cls, v: Optional[List[str]]) -> List[str]:
        return [] if v is None else v

    @field_validator("regex_pattern", mode="before")
    @classmethod
    def none_as_empty_string(cls, v: Optional[str]) -> str:
        return "" if v is None else v
