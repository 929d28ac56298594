"""
CRUD operations for Company model.

Implements the Repository pattern to encapsulate all database operations
for companies, providing a clean interface for the API layer.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional
from sqlalchemy import text
from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestError, NotFoundError
from app.core.sql import (
    BoundPair,
    FilterClauseBuilder,
    at_least,
    at_most,
    contains,
    named,
    param_name,
    sql_for_partial_update,
)
from app.models.company import Company
from app.schemas.company import CompanyCreateRequest

logger = logging.getLogger(__name__)

# Client field names that differ from their column names
JS_TO_SQL = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

company_filter = FilterClauseBuilder(
    [
        contains("nameLike", "name"),
        at_least("minEmployees", "num_employees"),
        at_most("maxEmployees", "num_employees"),
    ],
    bounds=[
        BoundPair(
            "minEmployees",
            "maxEmployees",
            "Minimum employees cannot be greater than Maximum employees."
        ),
    ],
)


def create(db: Session, company_data: CompanyCreateRequest) -> Company:
    """
    Create a new company in the database.

    Args:
        db: Database session
        company_data: Validated company creation data

    Returns:
        Created Company instance

    Raises:
        BadRequestError: If a company with the same handle exists
    """
    duplicate = db.query(Company).filter(Company.handle == company_data.handle).first()
    if duplicate:
        raise BadRequestError(f"Duplicate company: {company_data.handle}")

    db_company = Company(
        handle=company_data.handle,
        name=company_data.name,
        description=company_data.description,
        num_employees=company_data.num_employees,
        logo_url=company_data.logo_url,
    )

    db.add(db_company)
    db.commit()
    db.refresh(db_company)

    logger.info(f"Created company {db_company.handle}")
    return db_company


def find_all(db: Session, criteria: Optional[Mapping[str, Any]] = None) -> List[Company]:
    """
    Retrieve companies ordered by name, optionally filtered.

    An employee bound of 0 is a real filter, so companies whose
    num_employees is NULL drop out of minEmployees=0 and maxEmployees=0.

    Args:
        db: Database session
        criteria: Optional filters keyed nameLike (case-insensitive
            partial match), minEmployees, maxEmployees

    Raises:
        BadRequestError: If minEmployees > maxEmployees
    """
    where = company_filter.build(criteria)
    logger.debug(f"Company filter: {where.sql!r} {list(where.values)}")

    query = db.query(Company)
    expression = where.to_expression(Company.__table__)
    if expression is not None:
        query = query.filter(expression)

    return query.order_by(Company.name).all()


def get(db: Session, handle: str) -> Company:
    """
    Retrieve a company, with its jobs, by handle.

    Raises:
        NotFoundError: If no company has this handle
    """
    company = db.query(Company).filter(Company.handle == handle).first()
    if not company:
        raise NotFoundError(f"No company: {handle}")
    return company


def update(db: Session, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a company.

    Only the fields present in `data` change. Data can include name,
    description, numEmployees and logoUrl.

    Returns:
        The updated row as a dict of column values

    Raises:
        BadRequestError: If data is empty
        NotFoundError: If no company has this handle
    """
    set_clause = sql_for_partial_update(data, JS_TO_SQL)
    handle_idx = set_clause.next_index

    query_sql = f"""
        UPDATE companies
        SET {set_clause.render(named)}
        WHERE handle = {named(handle_idx)}
        RETURNING handle, name, description, num_employees, logo_url"""
    logger.debug(f"Company update: {set_clause.sql!r} {list(set_clause.values)}")

    params = set_clause.params()
    params[param_name(handle_idx)] = handle

    row = db.execute(text(query_sql), params).mappings().first()
    if not row:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    company = dict(row)
    db.commit()

    logger.info(f"Updated company {handle}: {', '.join(data)}")
    return company


def remove(db: Session, handle: str) -> None:
    """
    Delete a company and its jobs.

    Raises:
        NotFoundError: If no company has this handle
    """
    company = get(db, handle)
    db.delete(company)
    db.commit()

    logger.info(f"Deleted company {handle}")
