"""
Helpers for building parameterized SQL by hand.

Fragments are written with Postgres-style positional placeholders
(``$1``, ``$2`` ...). ``run_query`` rewrites them into SQLAlchemy named
binds right before execution, so the same SQL text runs against
PostgreSQL and the SQLite test database.
"""

import re
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence

from sqlalchemy import text
from sqlalchemy.engine import Result
from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestError

_PLACEHOLDER = re.compile(r"\$(\d+)")


@dataclass
class PartialUpdate:
    """Compiled ``SET`` clause and the values bound to its placeholders."""
    set_cols: str
    values: List[Any]


def sql_for_partial_update(
    data_to_update: Mapping[str, Any],
    js_to_sql: Optional[Mapping[str, str]] = None
) -> PartialUpdate:
    """
    Compile a sparse mapping of changes into a partial ``UPDATE`` fragment.

    Args:
        data_to_update: External field name -> new value, only for the
            fields being changed
        js_to_sql: External field name -> column name, for fields whose
            column is named differently

    Returns:
        PartialUpdate whose ``set_cols`` looks like
        ``'"first_name"=$1, "age"=$2'`` and whose ``values`` line up with
        the placeholders

    Raises:
        BadRequestError: If there is nothing to update
    """
    keys = list(data_to_update)
    if not keys:
        raise BadRequestError("No data")

    js_to_sql = js_to_sql or {}
    cols = [
        f'"{js_to_sql.get(key) or key}"=${idx}'
        for idx, key in enumerate(keys, start=1)
    ]

    return PartialUpdate(
        set_cols=", ".join(cols),
        values=[data_to_update[key] for key in keys],
    )


@dataclass
class WhereClause:
    """
    Conjunction of optional predicates.

    Each ``add`` call appends one predicate; ``{}`` markers in its template
    are replaced by the next positional placeholders.
    """
    predicates: List[str] = field(default_factory=list)
    values: List[Any] = field(default_factory=list)

    def add(self, template: str, *values: Any) -> "WhereClause":
        placeholders = []
        for value in values:
            self.values.append(value)
            placeholders.append(f"${len(self.values)}")
        self.predicates.append(template.format(*placeholders))
        return self

    def __bool__(self) -> bool:
        return bool(self.predicates)

    def __str__(self) -> str:
        if not self.predicates:
            return ""
        return "WHERE " + " AND ".join(self.predicates)


def run_query(db: Session, sql: str, values: Sequence[Any] = ()) -> Result:
    """
    Execute positional SQL on the given session.

    Args:
        db: Database session
        sql: SQL text using ``$n`` placeholders
        values: Values for ``$1..$n``, in order

    Returns:
        SQLAlchemy Result
    """
    params = {f"p{idx}": value for idx, value in enumerate(values, start=1)}
    return db.execute(text(_PLACEHOLDER.sub(r":p\1", sql)), params)
