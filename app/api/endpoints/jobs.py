import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_admin_user
from app.crud import job as job_crud
from app.models.user import User
from app.schemas.base import MAX_INT, DeletedResponse
from app.schemas.job import JobCreate, JobEnvelope, JobFilters, JobListEnvelope, JobUpdate

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=JobEnvelope)
def create_job(
    request: JobCreate,
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    """
    Create a job posting.

    Body: { title, salary, equity, companyHandle }

    Authorization required: admin
    """
    job = job_crud.create(db, request)
    logger.info(f"Created job {job['id']}: {job['title']} at {job['companyHandle']}")
    return {"job": job}


@router.get("", response_model=JobListEnvelope)
def list_jobs(
    title: Optional[str] = None,
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0, le=MAX_INT),
    has_equity: bool = Query(False, alias="hasEquity"),
    db: Session = Depends(get_db)
):
    """
    List jobs, optionally filtered.

    Args:
        title: Case-insensitive substring of the job title
        minSalary: Only jobs paying at least this much
        hasEquity: When true, only jobs offering non-zero equity

    Authorization required: none
    """
    filters = JobFilters(title=title, min_salary=min_salary, has_equity=has_equity)
    return {"jobs": job_crud.find_all(db, filters)}


@router.get("/{job_id}", response_model=JobEnvelope)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """
    Retrieve a job by ID.

    Authorization required: none
    """
    return {"job": job_crud.get(db, job_id)}


@router.patch("/{job_id}", response_model=JobEnvelope)
def update_job(
    job_id: int,
    request: JobUpdate,
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    """
    Patch job data.

    Fields can be: { title, salary, equity }

    Authorization required: admin
    """
    job = job_crud.update(db, job_id, request)
    logger.info(f"Updated job {job_id}")
    return {"job": job}


@router.delete("/{job_id}", response_model=DeletedResponse)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    """
    Delete a job by ID.

    Authorization required: admin
    """
    job_crud.remove(db, job_id)
    logger.info(f"Deleted job {job_id}")
    return {"deleted": str(job_id)}
