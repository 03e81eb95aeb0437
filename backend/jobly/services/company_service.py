import logging
from typing import Any

from sqlalchemy import delete, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..errors import BadRequestError, NotFoundError
from ..models import Company
from ..utils.filters import filter_companies
from ..utils.sql import sql_for_partial_update, to_named_params

logger = logging.getLogger(__name__)

COLUMN_MAP = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}


def company_record(company: Company) -> dict[str, Any]:
    return {
        "handle": company.handle,
        "name": company.name,
        "description": company.description,
        "numEmployees": company.num_employees,
        "logoUrl": company.logo_url,
    }


def create(db: Session, data: dict[str, Any]) -> dict[str, Any]:
    """Create a company from `data` ({handle, name, description, numEmployees, logoUrl}).

    Raises BadRequestError if the handle or name is already taken.
    """
    handle = data["handle"]
    if db.get(Company, handle) is not None:
        raise BadRequestError(f"Duplicate company: {handle}")

    company = Company(
        handle=handle,
        name=data["name"],
        description=data["description"],
        num_employees=data.get("numEmployees"),
        logo_url=data.get("logoUrl"),
    )
    db.add(company)
    try:
        db.commit()
    except IntegrityError as ex:
        db.rollback()
        raise BadRequestError(f"Duplicate company: {handle}") from ex

    logger.info("Created company %s", handle)
    return company_record(company)


def find_all(db: Session, filters: dict[str, Any] | None = None) -> list[dict[str, Any]]:
    """All companies ordered by name, narrowed by minEmployees / maxEmployees / nameLike."""
    companies = db.query(Company).order_by(Company.name).all()
    return filter_companies([company_record(c) for c in companies], filters)


def get(db: Session, handle: str) -> dict[str, Any]:
    """Company data plus its jobs ({id, title, salary, equity}, ordered by id)."""
    company = db.get(Company, handle)
    if company is None:
        raise NotFoundError(f"No company: {handle}")

    record = company_record(company)
    record["jobs"] = [
        {"id": j.id, "title": j.title, "salary": j.salary, "equity": j.equity}
        for j in company.jobs
    ]
    return record


def update(db: Session, handle: str, data: dict[str, Any]) -> dict[str, Any]:
    """Partial update: only the fields present in `data` are changed.

    Data can include {name, description, numEmployees, logoUrl}.

    Raises NoDataError on empty data, NotFoundError if there is no such company.
    """
    fragment = sql_for_partial_update(data, COLUMN_MAP)
    statement = f"UPDATE companies SET {fragment.set_clause} WHERE handle = {fragment.next_placeholder}"
    sql, params = to_named_params(statement, [*fragment.values, handle])

    try:
        result = db.execute(text(sql), params)
    except IntegrityError as ex:
        db.rollback()
        raise BadRequestError(f"Invalid update for company: {handle}") from ex

    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")
    db.commit()

    logger.info("Updated company %s (%s)", handle, ", ".join(data))
    return company_record(db.get(Company, handle))


def remove(db: Session, handle: str) -> None:
    result = db.execute(delete(Company).where(Company.handle == handle))
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")
    db.commit()
    logger.info("Removed company %s", handle)
