"""Pattern filter builder.

Translates optional filter inputs into SQL boolean fragments. The builder
tracks whether a clause already precedes the next fragment: the first
fragment it emits is introduced with WHERE (unless the caller starts it
in the "has preceding clause" state) and every later one with the
conjunction.

Example:
    >>> builder = PatternFilterBuilder()
    >>> builder.like_any("name", ["a%"])
    "WHERE name LIKE ANY (array['a%'])"
    >>> builder.regex("name", "^x")
    "AND name ~ '^x'"
    >>> builder.apply("SELECT name FROM t")
    "SELECT name FROM t WHERE name LIKE ANY (array['a%']) AND name ~ '^x'"
"""

from typing import List, Optional, Sequence

from pgdatasource.constants.sql import ArrayKeyword, ConcatKeyword, PatternOperator
from pgdatasource.logging import get_logger
from pgdatasource.query_builder.base import format_array_literal, quote_string, validate_identifier

logger = get_logger(__name__)


class PatternFilterBuilder:
    """Build filter fragments with correct boolean-join bookkeeping.

    An absent filter (``None``, empty list or empty string) emits nothing
    and leaves the join state untouched. The join state flips from "no
    preceding clause" to "has preceding clause" the first time a fragment
    is emitted and is never reset, so one builder serves one statement.

    Attributes:
        has_preceding_clause: Whether a clause already precedes the next
            fragment. Pass True when the base statement has its own WHERE.
        conjunction: Keyword joining every fragment after the first.
    """

    def __init__(
        self,
        has_preceding_clause: bool = False,
        conjunction: ConcatKeyword = ConcatKeyword.AND,
    ):
        self.has_preceding_clause = has_preceding_clause
        self.conjunction = ConcatKeyword(conjunction)
        self._fragments: List[str] = []

    @property
    def keyword(self) -> str:
        """Keyword that will introduce the next fragment."""
        if self.has_preceding_clause:
            return self.conjunction.value
        return ConcatKeyword.WHERE.value

    @property
    def fragments(self) -> List[str]:
        """Emitted fragments in emission order."""
        return list(self._fragments)

    def _emit(self, condition: str) -> str:
        fragment = f"{self.keyword} {condition}"
        self._fragments.append(fragment)
        self.has_preceding_clause = True
        return fragment

    def _array_condition(
        self,
        column: str,
        operator: PatternOperator,
        keyword: ArrayKeyword,
        values: Optional[Sequence[str]],
    ) -> str:
        if not values:
            return ""
        validate_identifier(column)
        array = format_array_literal(values, keyword)
        return self._emit(f"{column} {operator.value} {keyword.value} ({array})")

    def equals_any(self, column: str, values: Optional[Sequence[str]]) -> str:
        """Restrict the column to one of the given literal values."""
        return self._array_condition(column, PatternOperator.EQUALS, ArrayKeyword.ANY, values)

    def like_any(self, column: str, patterns: Optional[Sequence[str]]) -> str:
        """Column must match at least one LIKE pattern."""
        return self._array_condition(column, PatternOperator.LIKE, ArrayKeyword.ANY, patterns)

    def like_all(self, column: str, patterns: Optional[Sequence[str]]) -> str:
        """Column must match every LIKE pattern."""
        return self._array_condition(column, PatternOperator.LIKE, ArrayKeyword.ALL, patterns)

    def not_like_all(self, column: str, patterns: Optional[Sequence[str]]) -> str:
        """Column must match none of the LIKE patterns."""
        return self._array_condition(column, PatternOperator.NOT_LIKE, ArrayKeyword.ALL, patterns)

    def regex(self, column: str, pattern: Optional[str]) -> str:
        """Column must match the POSIX regular expression."""
        if not pattern:
            return ""
        validate_identifier(column)
        return self._emit(f"{column} {PatternOperator.REGEX.value} {quote_string(pattern)}")

    def build(self) -> str:
        """All emitted fragments joined into one clause."""
        return " ".join(self._fragments)

    def apply(self, query: str) -> str:
        """Append the emitted fragments to a base statement."""
        clause = self.build()
        if not clause:
            return query
        logger.debug("Applied %d filter fragment(s)", len(self._fragments))
        return f"{query} {clause}"
