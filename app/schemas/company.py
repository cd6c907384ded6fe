from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

from app.schemas.base import MAX_INT, CamelModel, RequestModel, reject_null
from app.schemas.job import JobSummary

URL_PATTERN = r"^https?://\S+$"


class CompanyCreate(RequestModel):
    """Schema for creating a new company"""
    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: str
    num_employees: Optional[int] = Field(None, ge=0, le=MAX_INT)
    logo_url: Optional[str] = Field(None, pattern=URL_PATTERN)


class CompanyUpdate(RequestModel):
    """
    Schema for patching a company.

    Omitted fields are left alone; explicit null clears numEmployees or logoUrl.
    The handle cannot be changed.
    """
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0, le=MAX_INT)
    logo_url: Optional[str] = Field(None, pattern=URL_PATTERN)

    @field_validator("name", "description")
    @classmethod
    def required_not_null(cls, v):
        return reject_null(v)


class CompanyFilters(BaseModel):
    """Optional search criteria for listing companies"""
    name: Optional[str] = None
    min_employees: Optional[int] = None
    max_employees: Optional[int] = None


class CompanyResponse(CamelModel):
    """Schema for company response"""
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class CompanyDetail(CompanyResponse):
    """Company with the jobs it has posted"""
    jobs: List[JobSummary]


class CompanyEnvelope(BaseModel):
    company: CompanyResponse


class CompanyDetailEnvelope(BaseModel):
    company: CompanyDetail


class CompanyListEnvelope(BaseModel):
    companies: List[CompanyResponse]
