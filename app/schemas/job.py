from pydantic import Field
from typing import List, Optional

from app.schemas.base import CamelModel, RequestModel


class JobCreateRequest(RequestModel):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1, max_length=200)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)
    company_handle: str = Field(..., min_length=1, max_length=25)


class JobUpdateRequest(RequestModel):
    """
    Schema for a partial job update.

    id and companyHandle cannot be changed.
    """
    title: str = Field(None, min_length=1, max_length=200)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)


class JobFilter(RequestModel):
    """Query string filters for listing jobs"""
    title: Optional[str] = None
    min_salary: Optional[int] = Field(None, ge=0)
    has_equity: Optional[bool] = None


class JobResponse(CamelModel):
    """Schema for job response"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[float] = None
    company_handle: str


class JobEnvelope(CamelModel):
    job: JobResponse


class JobListResponse(CamelModel):
    jobs: List[JobResponse]


class JobDeleteResponse(CamelModel):
    deleted: int
