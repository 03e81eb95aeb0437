import logging
from typing import Any

from sqlalchemy import delete, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..errors import BadRequestError, NotFoundError
from ..models import Company, Job
from ..utils.filters import filter_jobs
from ..utils.sql import sql_for_partial_update, to_named_params
from .company_service import company_record

logger = logging.getLogger(__name__)

COLUMN_MAP = {
    "companyHandle": "company_handle",
}


def job_record(job: Job) -> dict[str, Any]:
    return {
        "id": job.id,
        "title": job.title,
        "salary": job.salary,
        "equity": job.equity,
        "companyHandle": job.company_handle,
    }


def create(db: Session, data: dict[str, Any]) -> dict[str, Any]:
    """Create a job from `data` ({title, salary, equity, companyHandle}).

    Raises BadRequestError if the company already lists a job with this
    title, or if the company does not exist.
    """
    title = data["title"]
    handle = data["companyHandle"]

    duplicate = (
        db.query(Job.id)
        .filter(Job.title == title)
        .filter(Job.company_handle == handle)
        .first()
    )
    if duplicate:
        raise BadRequestError(f"Duplicate job: {title} at {handle}")
    if db.get(Company, handle) is None:
        raise BadRequestError(f"No company: {handle}")

    job = Job(
        title=title,
        salary=data.get("salary"),
        equity=data.get("equity"),
        company_handle=handle,
    )
    db.add(job)
    try:
        db.commit()
    except IntegrityError as ex:
        db.rollback()
        raise BadRequestError(f"Invalid job: {title} at {handle}") from ex

    logger.info("Created job %s (%s at %s)", job.id, title, handle)
    return job_record(job)


def find_all(db: Session, filters: dict[str, Any] | None = None) -> list[dict[str, Any]]:
    """All jobs ordered by title, narrowed by title / minSalary / hasEquity."""
    jobs = db.query(Job).order_by(Job.title, Job.id).all()
    return filter_jobs([job_record(j) for j in jobs], filters)


def get(db: Session, job_id: int) -> dict[str, Any]:
    """Job data with the owning company nested in place of companyHandle."""
    job = db.get(Job, job_id)
    if job is None:
        raise NotFoundError(f"No job: {job_id}")

    record = job_record(job)
    del record["companyHandle"]
    record["company"] = company_record(job.company)
    return record


def update(db: Session, job_id: int, data: dict[str, Any]) -> dict[str, Any]:
    """Partial update: only the fields present in `data` are changed.

    Data can include {title, salary, equity}; None clears a nullable field.

    Raises NoDataError on empty data, NotFoundError if there is no such job.
    """
    fragment = sql_for_partial_update(data, COLUMN_MAP)
    statement = f"UPDATE jobs SET {fragment.set_clause} WHERE id = {fragment.next_placeholder}"
    sql, params = to_named_params(statement, [*fragment.values, job_id])

    try:
        result = db.execute(text(sql), params)
    except IntegrityError as ex:
        db.rollback()
        raise BadRequestError(f"Invalid update for job: {job_id}") from ex

    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")
    db.commit()

    logger.info("Updated job %s (%s)", job_id, ", ".join(data))
    return job_record(db.get(Job, job_id))


def remove(db: Session, job_id: int) -> None:
    result = db.execute(delete(Job).where(Job.id == job_id))
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")
    db.commit()
    logger.info("Removed job %s", job_id)
