"""
repositories/predicate.py
-------------------------
Builds WHERE clauses out of optional equality filters.

Each filter field becomes one ``column = %s`` term when it has a value and
is skipped otherwise; the terms are joined with AND.
"""

from typing import Any, Optional


class PredicateBuilder:
    """Collects optional equality terms and renders them as parameterized SQL."""

    def __init__(self):
        self._clauses: list[str] = []
        self._params: list[Any] = []

    def add(self, value: Optional[Any], column: str) -> "PredicateBuilder":
        """
        Add ``column = value`` unless the value is missing.

        None and blank strings count as missing.

        Args:
            value: The filter value.
            column: Fully qualified column name, e.g. ``c.name``.
                Always supplied by code, never by the caller.

        Returns:
            The builder itself, for chaining.
        """
        if value is None or (isinstance(value, str) and not value.strip()):
            return self
        self._clauses.append(f"{column} = %s")
        self._params.append(value)
        return self

    def build_and(self) -> tuple[str, list]:
        """
        Render the collected terms.

        Returns:
            ``(sql, params)``; ``("TRUE", [])`` when no term was added.
        """
        if not self._clauses:
            return "TRUE", []
        return " AND ".join(self._clauses), list(self._params)
