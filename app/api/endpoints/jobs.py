import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import ensure_admin, query_filters
from app.crud import job as job_crud
from app.schemas.job import (
    JobCreateRequest,
    JobDeleteResponse,
    JobEnvelope,
    JobFilter,
    JobListResponse,
    JobResponse,
    JobUpdateRequest,
)
from app.schemas.user import AuthUser

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=JobEnvelope)
def create_job(
    request: JobCreateRequest,
    db: Session = Depends(get_db),
    admin: AuthUser = Depends(ensure_admin)
):
    """
    Create a job posting.

    job should be { title, salary, equity, companyHandle }

    Authorization required: admin
    """
    new_job = job_crud.create(db, request)
    logger.info(f"{admin.username} created job {new_job.id}")
    return {"job": JobResponse.model_validate(new_job)}


@router.get("/", response_model=JobListResponse)
def list_jobs(
    filters: JobFilter = Depends(query_filters(JobFilter)),
    db: Session = Depends(get_db)
):
    """
    List jobs ordered by title.

    Optional query filters:
    - title: case-insensitive partial match
    - minSalary: inclusive lower bound
    - hasEquity: true keeps only jobs offering equity
    """
    criteria = filters.model_dump(by_alias=True, exclude_none=True)
    jobs = job_crud.find_all(db, criteria)
    return {"jobs": [JobResponse.model_validate(j) for j in jobs]}


@router.get("/{job_id}", response_model=JobEnvelope)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """Retrieve a job by ID."""
    job = job_crud.get(db, job_id)
    return {"job": JobResponse.model_validate(job)}


@router.patch("/{job_id}", response_model=JobEnvelope)
def update_job(
    job_id: int,
    request: JobUpdateRequest,
    db: Session = Depends(get_db),
    admin: AuthUser = Depends(ensure_admin)
):
    """
    Partially update a job.

    Fields can be: title, salary, equity. id and companyHandle are fixed.
    """
    data = request.model_dump(by_alias=True, exclude_unset=True)
    job = job_crud.update(db, job_id, data)
    return {"job": JobResponse.model_validate(job)}


@router.delete("/{job_id}", response_model=JobDeleteResponse)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    admin: AuthUser = Depends(ensure_admin)
):
    """Delete a job by ID."""
    job_crud.remove(db, job_id)
    logger.info(f"{admin.username} deleted job {job_id}")
    return {"deleted": job_id}
