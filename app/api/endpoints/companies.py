"""
Company endpoints.

- POST   /companies            admin
- GET    /companies            anyone; filters nameLike, minEmployees, maxEmployees
- GET    /companies/{handle}   anyone; includes the company's jobs
- PATCH  /companies/{handle}   admin
- DELETE /companies/{handle}   admin
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import ensure_admin, query_filters
from app.crud import company as company_crud
from app.schemas.company import (
    CompanyCreateRequest,
    CompanyDeleteResponse,
    CompanyDetailEnvelope,
    CompanyDetailResponse,
    CompanyEnvelope,
    CompanyFilter,
    CompanyListResponse,
    CompanyResponse,
    CompanyUpdateRequest,
)
from app.schemas.user import AuthUser

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=CompanyEnvelope)
def create_company(
    request: CompanyCreateRequest,
    db: Session = Depends(get_db),
    admin: AuthUser = Depends(ensure_admin)
):
    """Create a company. Returns { company }."""
    company = company_crud.create(db, request)
    logger.info(f"{admin.username} created company {company.handle}")
    return {"company": CompanyResponse.model_validate(company)}


@router.get("/", response_model=CompanyListResponse)
def list_companies(
    filters: CompanyFilter = Depends(query_filters(CompanyFilter)),
    db: Session = Depends(get_db)
):
    """
    List companies ordered by name.

    Optional query filters:
    - nameLike: case-insensitive partial match on name
    - minEmployees / maxEmployees: inclusive employee count bounds
    """
    criteria = filters.model_dump(by_alias=True, exclude_none=True)
    companies = company_crud.find_all(db, criteria)
    return {"companies": [CompanyResponse.model_validate(c) for c in companies]}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, db: Session = Depends(get_db)):
    """Retrieve a company and its jobs by handle."""
    company = company_crud.get(db, handle)
    return {"company": CompanyDetailResponse.model_validate(company)}


@router.patch("/{handle}", response_model=CompanyEnvelope)
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    db: Session = Depends(get_db),
    admin: AuthUser = Depends(ensure_admin)
):
    """
    Partially update a company.

    Fields can be: name, description, numEmployees, logoUrl
    """
    data = request.model_dump(by_alias=True, exclude_unset=True)
    company = company_crud.update(db, handle, data)
    return {"company": CompanyResponse.model_validate(company)}


@router.delete("/{handle}", response_model=CompanyDeleteResponse)
def delete_company(
    handle: str,
    db: Session = Depends(get_db),
    admin: AuthUser = Depends(ensure_admin)
):
    """Delete a company and its jobs."""
    company_crud.remove(db, handle)
    logger.info(f"{admin.username} deleted company {handle}")
    return {"deleted": handle}
