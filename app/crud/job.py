"""
CRUD operations for jobs.

Same conventions as the company operations: parameterized SQL on an
injected session, rows returned with camelCase keys. Equity is stored as
NUMERIC and handed back as a decimal string.
"""

from typing import Any, List, Optional
from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestError, NotFoundError
from app.core.sql import WhereClause, run_query, sql_for_partial_update
from app.schemas.job import JobCreate, JobFilters, JobUpdate, normalize_equity

# Every updatable job field has the same name as its column
JS_TO_SQL: dict = {}

COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'


def format_equity(value: Any) -> Optional[str]:
    """Render a NUMERIC equity value (Decimal on Postgres, float on SQLite) as text."""
    return normalize_equity(value)


def _to_job(row) -> dict:
    job = dict(row)
    job["equity"] = format_equity(job["equity"])
    return job


def create(db: Session, data: JobCreate) -> dict:
    """
    Create a job for an existing company.

    Returns:
        { id, title, salary, equity, companyHandle }

    Raises:
        BadRequestError: If the company does not exist, or it already has a
            job with this title
    """
    company = run_query(
        db, "SELECT handle FROM companies WHERE handle = $1", [data.company_handle]
    ).first()
    if not company:
        raise BadRequestError(f"No company: {data.company_handle}")

    duplicate = run_query(
        db,
        "SELECT id FROM jobs WHERE title = $1 AND company_handle = $2",
        [data.title, data.company_handle],
    ).first()
    if duplicate:
        raise BadRequestError(f"Duplicate job: {data.title} at {data.company_handle}")

    row = run_query(
        db,
        f"""INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {COLUMNS}""",
        [data.title, data.salary, data.equity, data.company_handle],
    ).mappings().one()
    db.commit()

    return _to_job(row)


def find_all(db: Session, filters: Optional[JobFilters] = None) -> List[dict]:
    """
    List jobs, narrowed by whichever filters are given.

    Filters:
        title: case-insensitive substring of the job title
        min_salary: salary at least this much
        has_equity: when True, only jobs with non-null equity above zero;
            False adds no restriction

    Returns:
        [{ id, title, salary, equity, companyHandle }, ...] in insertion order
    """
    filters = filters or JobFilters()
    where = WhereClause()

    if filters.title is not None:
        where.add("LOWER(title) LIKE {}", f"%{filters.title.lower()}%")
    if filters.min_salary is not None:
        where.add("salary >= {}", filters.min_salary)
    if filters.has_equity:
        where.add("equity IS NOT NULL AND equity > 0")

    rows = run_query(
        db,
        f"""SELECT {COLUMNS}
            FROM jobs
            {where}
            ORDER BY id""",
        where.values,
    ).mappings().all()

    return [_to_job(row) for row in rows]


def get(db: Session, job_id: int) -> dict:
    """
    Get a job by id.

    Raises:
        NotFoundError: If no such job
    """
    row = run_query(
        db, f"SELECT {COLUMNS} FROM jobs WHERE id = $1", [job_id]
    ).mappings().first()
    if not row:
        raise NotFoundError(f"No job: {job_id}", details={"id": job_id})

    return _to_job(row)


def update(db: Session, job_id: int, data: JobUpdate) -> dict:
    """
    Apply a partial update to a job.

    Only title, salary and equity can change; explicit null clears salary
    or equity.

    Returns:
        The job as stored after the update

    Raises:
        NotFoundError: If no such job
        BadRequestError: If ``data`` sets no fields
    """
    get(db, job_id)

    changes = data.model_dump(exclude_unset=True, by_alias=True)
    partial = sql_for_partial_update(changes, JS_TO_SQL)
    id_idx = len(partial.values) + 1

    row = run_query(
        db,
        f"""UPDATE jobs
            SET {partial.set_cols}
            WHERE id = ${id_idx}
            RETURNING {COLUMNS}""",
        [*partial.values, job_id],
    ).mappings().one()
    db.commit()

    return _to_job(row)


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job.

    Raises:
        NotFoundError: If no such job
    """
    get(db, job_id)
    run_query(db, "DELETE FROM jobs WHERE id = $1", [job_id])
    db.commit()
