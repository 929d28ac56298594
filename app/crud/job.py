"""
CRUD operations for Job model.

Implements the Repository pattern to encapsulate all database operations
for jobs, providing a clean interface for the API layer.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional
from sqlalchemy import text
from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestError, NotFoundError
from app.core.sql import (
    FilterClauseBuilder,
    at_least,
    contains,
    named,
    param_name,
    positive_when_set,
    sql_for_partial_update,
)
from app.models.company import Company
from app.models.job import Job
from app.schemas.job import JobCreateRequest

logger = logging.getLogger(__name__)

JS_TO_SQL = {
    "companyHandle": "company_handle",
}

job_filter = FilterClauseBuilder([
    contains("title", "title"),
    at_least("minSalary", "salary"),
    positive_when_set("hasEquity", "equity"),
])


def create(db: Session, job_data: JobCreateRequest) -> Job:
    """
    Create a new job in the database.

    Args:
        db: Database session
        job_data: Validated job creation data

    Returns:
        Created Job instance with id

    Raises:
        BadRequestError: If the company does not exist
    """
    company = db.query(Company).filter(Company.handle == job_data.company_handle).first()
    if not company:
        raise BadRequestError(f"No company: {job_data.company_handle}")

    db_job = Job(
        title=job_data.title,
        salary=job_data.salary,
        equity=job_data.equity,
        company_handle=job_data.company_handle,
    )

    db.add(db_job)
    db.commit()
    db.refresh(db_job)

    logger.info(f"Created job {db_job.id}: {db_job.title} at {db_job.company_handle}")
    return db_job


def find_all(db: Session, criteria: Optional[Mapping[str, Any]] = None) -> List[Job]:
    """
    Retrieve jobs ordered by title, optionally filtered.

    Args:
        db: Database session
        criteria: Optional filters keyed title (case-insensitive partial
            match), minSalary, hasEquity (True keeps jobs with equity > 0)
    """
    where = job_filter.build(criteria)
    logger.debug(f"Job filter: {where.sql!r} {list(where.values)}")

    query = db.query(Job)
    expression = where.to_expression(Job.__table__)
    if expression is not None:
        query = query.filter(expression)

    return query.order_by(Job.title, Job.id).all()


def get(db: Session, job_id: int) -> Job:
    """
    Retrieve a job by its ID.

    Raises:
        NotFoundError: If the job does not exist
    """
    job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise NotFoundError(f"No job: {job_id}")
    return job


def update(db: Session, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a job.

    Data can include title, salary and equity.

    Returns:
        The updated row as a dict of column values

    Raises:
        BadRequestError: If data is empty
        NotFoundError: If the job does not exist
    """
    set_clause = sql_for_partial_update(data, JS_TO_SQL)
    id_idx = set_clause.next_index

    query_sql = f"""
        UPDATE jobs
        SET {set_clause.render(named)}
        WHERE id = {named(id_idx)}
        RETURNING id, title, salary, equity, company_handle"""
    logger.debug(f"Job update: {set_clause.sql!r} {list(set_clause.values)}")

    params = set_clause.params()
    params[param_name(id_idx)] = job_id

    row = db.execute(text(query_sql), params).mappings().first()
    if not row:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    job = dict(row)
    db.commit()

    logger.info(f"Updated job {job_id}: {', '.join(data)}")
    return job


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job by ID.

    Raises:
        NotFoundError: If the job does not exist
    """
    job = get(db, job_id)
    db.delete(job)
    db.commit()

    logger.info(f"Deleted job {job_id}")
