from decimal import Decimal
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

from app.schemas.base import MAX_INT, CamelModel, RequestModel, reject_null

# Decimal string between 0 and 1 inclusive, e.g. "0", "0.25", "1.0"
EQUITY_PATTERN = r"^(0(\.\d+)?|1(\.0+)?)$"


def normalize_equity(value) -> Optional[str]:
    """Canonical text for an equity fraction: no trailing zeros, no exponent."""
    if value is None:
        return None
    return format(Decimal(str(value)).normalize(), "f")


class JobCreate(RequestModel):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0, le=MAX_INT)
    equity: Optional[str] = Field(None, pattern=EQUITY_PATTERN)
    company_handle: str = Field(..., min_length=1, max_length=25)

    @field_validator("equity")
    @classmethod
    def canonical_equity(cls, v):
        return normalize_equity(v)


class JobUpdate(RequestModel):
    """
    Schema for patching a job.

    Omitted fields are left alone; explicit null clears salary or equity.
    id and companyHandle cannot be changed.
    """
    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0, le=MAX_INT)
    equity: Optional[str] = Field(None, pattern=EQUITY_PATTERN)

    @field_validator("title")
    @classmethod
    def title_not_null(cls, v):
        return reject_null(v)

    @field_validator("equity")
    @classmethod
    def canonical_equity(cls, v):
        return normalize_equity(v)


class JobFilters(BaseModel):
    """Optional search criteria for listing jobs"""
    title: Optional[str] = None
    min_salary: Optional[int] = None
    has_equity: bool = False


class JobSummary(CamelModel):
    """Job as listed under its company"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None


class JobResponse(JobSummary):
    """Schema for job response"""
    company_handle: str


class JobEnvelope(BaseModel):
    job: JobResponse


class JobListEnvelope(BaseModel):
    jobs: List[JobResponse]
