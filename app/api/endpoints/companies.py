import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_admin_user
from app.core.exceptions import BadRequestError
from app.crud import company as company_crud
from app.models.user import User
from app.schemas.base import MAX_INT, DeletedResponse
from app.schemas.company import (
    CompanyCreate,
    CompanyDetailEnvelope,
    CompanyEnvelope,
    CompanyFilters,
    CompanyListEnvelope,
    CompanyUpdate,
)

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=CompanyEnvelope)
def create_company(
    request: CompanyCreate,
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    """
    Create a company.

    Body: { handle, name, description, numEmployees, logoUrl }

    Authorization required: admin
    """
    company = company_crud.create(db, request)
    logger.info(f"Created company {company['handle']} (by {admin_user.username})")
    return {"company": company}


@router.get("", response_model=CompanyListEnvelope)
def list_companies(
    name: Optional[str] = None,
    min_employees: Optional[int] = Query(None, alias="minEmployees", ge=0, le=MAX_INT),
    max_employees: Optional[int] = Query(None, alias="maxEmployees", ge=0, le=MAX_INT),
    db: Session = Depends(get_db)
):
    """
    List companies, optionally filtered.

    Args:
        name: Case-insensitive substring of the company name
        minEmployees: Inclusive lower bound on employee count
        maxEmployees: Inclusive upper bound on employee count

    Returns 400 if minEmployees is greater than maxEmployees.

    Authorization required: none
    """
    if (
        min_employees is not None
        and max_employees is not None
        and min_employees > max_employees
    ):
        raise BadRequestError("minEmployees must be less than maxEmployees")

    filters = CompanyFilters(
        name=name,
        min_employees=min_employees,
        max_employees=max_employees,
    )
    return {"companies": company_crud.find_all(db, filters)}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, db: Session = Depends(get_db)):
    """
    Retrieve a company by handle, with its jobs as [{ id, title, salary, equity }].

    Authorization required: none
    """
    return {"company": company_crud.get(db, handle)}


@router.patch("/{handle}", response_model=CompanyEnvelope)
def update_company(
    handle: str,
    request: CompanyUpdate,
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    """
    Patch company data.

    Fields can be: { name, description, numEmployees, logoUrl }

    Authorization required: admin
    """
    company = company_crud.update(db, handle, request)
    logger.info(f"Updated company {handle} (by {admin_user.username})")
    return {"company": company}


@router.delete("/{handle}", response_model=DeletedResponse)
def delete_company(
    handle: str,
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    """
    Delete a company and its jobs.

    Authorization required: admin
    """
    company_crud.remove(db, handle)
    logger.info(f"Deleted company {handle} (by {admin_user.username})")
    return {"deleted": handle}
