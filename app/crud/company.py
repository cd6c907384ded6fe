"""
CRUD operations for companies.

Queries are plain parameterized SQL run through the session passed in by the
caller. Rows come back keyed by column name and are returned with the public
camelCase field names.
"""

from typing import List, Optional
from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestError, NotFoundError
from app.core.sql import WhereClause, run_query, sql_for_partial_update
from app.crud.job import format_equity
from app.schemas.company import CompanyCreate, CompanyFilters, CompanyUpdate

# Public field name -> column name, where they differ
JS_TO_SQL = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

COLUMNS = ('handle, name, description, '
           'num_employees AS "numEmployees", logo_url AS "logoUrl"')


def create(db: Session, data: CompanyCreate) -> dict:
    """
    Create a company.

    Args:
        db: Database session
        data: Validated company data

    Returns:
        { handle, name, description, numEmployees, logoUrl }

    Raises:
        BadRequestError: If a company with this handle already exists
    """
    duplicate = run_query(
        db, "SELECT handle FROM companies WHERE handle = $1", [data.handle]
    ).first()
    if duplicate:
        raise BadRequestError(f"Duplicate company: {data.handle}", details={"handle": data.handle})

    row = run_query(
        db,
        f"""INSERT INTO companies
            (handle, name, description, num_employees, logo_url)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING {COLUMNS}""",
        [data.handle, data.name, data.description, data.num_employees, data.logo_url],
    ).mappings().one()
    db.commit()

    return dict(row)


def find_all(db: Session, filters: Optional[CompanyFilters] = None) -> List[dict]:
    """
    List companies, narrowed by whichever filters are given.

    name matches case-insensitively anywhere in the company name;
    min_employees and max_employees are inclusive bounds. With no filters
    every company is returned. Checking min <= max is the caller's job.

    Returns:
        [{ handle, name, description, numEmployees, logoUrl }, ...] ordered by name
    """
    filters = filters or CompanyFilters()
    where = WhereClause()

    if filters.name is not None:
        where.add("LOWER(name) LIKE {}", f"%{filters.name.lower()}%")
    if filters.min_employees is not None:
        where.add("num_employees >= {}", filters.min_employees)
    if filters.max_employees is not None:
        where.add("num_employees <= {}", filters.max_employees)

    rows = run_query(
        db,
        f"""SELECT {COLUMNS}
            FROM companies
            {where}
            ORDER BY name""",
        where.values,
    ).mappings().all()

    return [dict(row) for row in rows]


def get(db: Session, handle: str) -> dict:
    """
    Get a company and the jobs it has posted.

    Returns:
        { handle, name, description, numEmployees, logoUrl, jobs }
        where jobs is [{ id, title, salary, equity }, ...]

    Raises:
        NotFoundError: If no such company
    """
    row = run_query(
        db, f"SELECT {COLUMNS} FROM companies WHERE handle = $1", [handle]
    ).mappings().first()
    if not row:
        raise NotFoundError(f"No company: {handle}", details={"handle": handle})

    company = dict(row)
    jobs = run_query(
        db,
        """SELECT id, title, salary, equity
           FROM jobs
           WHERE company_handle = $1
           ORDER BY id""",
        [handle],
    ).mappings().all()
    company["jobs"] = [
        {**job, "equity": format_equity(job["equity"])} for job in jobs
    ]

    return company


def update(db: Session, handle: str, data: CompanyUpdate) -> dict:
    """
    Apply a partial update to a company.

    Only fields set on ``data`` change; an explicit null clears the column.

    Returns:
        The company as stored after the update

    Raises:
        NotFoundError: If no such company
        BadRequestError: If ``data`` sets no fields
    """
    _ensure_exists(db, handle)

    changes = data.model_dump(exclude_unset=True, by_alias=True)
    partial = sql_for_partial_update(changes, JS_TO_SQL)
    handle_idx = len(partial.values) + 1

    row = run_query(
        db,
        f"""UPDATE companies
            SET {partial.set_cols}
            WHERE handle = ${handle_idx}
            RETURNING {COLUMNS}""",
        [*partial.values, handle],
    ).mappings().one()
    db.commit()

    return dict(row)


def remove(db: Session, handle: str) -> None:
    """
    Delete a company; its jobs go with it.

    Raises:
        NotFoundError: If no such company
    """
    _ensure_exists(db, handle)
    run_query(db, "DELETE FROM companies WHERE handle = $1", [handle])
    db.commit()


def _ensure_exists(db: Session, handle: str) -> None:
    found = run_query(
        db, "SELECT handle FROM companies WHERE handle = $1", [handle]
    ).first()
    if not found:
        raise NotFoundError(f"No company: {handle}", details={"handle": handle})
