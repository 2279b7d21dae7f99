"""Builders for the dynamic parts of catalog statements.

Both builders produce SQL text that contains only fixed fragments and ``%s``
placeholders, plus the list of values to bind to them. Values coming from a
client never end up in the statement text.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Any

from src.services.errors import NoFieldsToUpdate

PRODUCT_UPDATABLE_COLUMNS = ("name", "about", "price")

# Leading number as read by a lenient float parser: "12.5abc" -> 12.5
_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


@dataclass
class Predicate:
    conditions: list[str] = field(default_factory=list)
    params: list[Any] = field(default_factory=list)

    def add(self, condition: str, value: Any) -> None:
        """Append one single-placeholder condition with its bound value."""
        self.conditions.append(condition)
        self.params.append(value)

    def __bool__(self) -> bool:
        return bool(self.conditions)

    def where(self) -> str:
        """Render the WHERE clause, or an empty string when nothing filters."""
        if not self.conditions:
            return ""
        return "WHERE " + " AND ".join(self.conditions)


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so the text is matched literally."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def parse_price(raw: Any) -> float | None:
    """Read a price filter from client text.

    Returns None when no finite number can be read, in which case the filter
    is ignored instead of failing the request.
    """
    if raw is None:
        return None
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        value = float(raw)
    else:
        match = _LEADING_NUMBER.match(str(raw))
        if not match:
            return None
        value = float(match.group(1))
    return value if math.isfinite(value) else None


def build_product_filters(filters) -> Predicate:
    """
    Build the WHERE predicate for a product listing.

    Args:
        filters: ProductFilters (name_contains, about_contains, max_price)

    Returns:
        Predicate; empty when every filter is absent, empty or unparsable
    """
    predicate = Predicate()

    if filters is None:
        return predicate

    if filters.name_contains:
        predicate.add("name ILIKE %s", f"%{escape_like(filters.name_contains)}%")

    if filters.about_contains:
        predicate.add("about ILIKE %s", f"%{escape_like(filters.about_contains)}%")

    max_price = parse_price(filters.max_price) if filters.max_price else None
    if max_price is not None:
        predicate.add("price <= %s", max_price)

    return predicate


def build_partial_update(
    table: str,
    key_column: str,
    key: Any,
    fields: dict[str, Any],
    allowed_columns: tuple[str, ...] = PRODUCT_UPDATABLE_COLUMNS,
) -> tuple[str, list[Any]]:
    """
    Build an UPDATE ... RETURNING * statement touching only the given fields.

    Args:
        table: Table name (trusted, from code)
        key_column: Column identifying the row (trusted, from code)
        key: Value identifying the row, bound as the last parameter
        fields: Present fields only; absent fields must not be in the dict
        allowed_columns: Columns a client is allowed to change

    Returns:
        Tuple of (statement, params) with one param per placeholder

    Raises:
        NoFieldsToUpdate: When ``fields`` is empty
        ValueError: When a field is not an updatable column
    """
    if not fields:
        raise NoFieldsToUpdate()

    unknown = set(fields) - set(allowed_columns)
    if unknown:
        raise ValueError(f"Columns not updatable on {table}: {sorted(unknown)}")

    assignments = []
    params = []
    # Keep column order stable so statements are predictable in logs and tests
    for column in allowed_columns:
        if column in fields:
            assignments.append(f"{column} = %s")
            params.append(fields[column])

    params.append(key)
    statement = f"UPDATE {table} SET {', '.join(assignments)} WHERE {key_column} = %s RETURNING *"
    return statement, params
