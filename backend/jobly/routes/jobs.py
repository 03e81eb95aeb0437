from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from ..auth import ensure_admin
from ..database import get_db
from ..schemas import JobNew, JobUpdate
from ..services import job_service

router = APIRouter(prefix="/jobs", tags=["Jobs"])

# jobs.id is a 32-bit INTEGER column
MAX_JOB_ID = 2**31 - 1


@router.post("", status_code=201, dependencies=[Depends(ensure_admin)])
def create_job(payload: JobNew, db: Session = Depends(get_db)):
    """Create a job. Admin only.

    Body: {title, salary, equity, companyHandle}
    """
    return {"job": job_service.create(db, payload.to_record())}


@router.get("")
def list_jobs(
    title: str | None = Query(None),
    min_salary: int | None = Query(None, alias="minSalary", ge=0),
    has_equity: bool | None = Query(None, alias="hasEquity"),
    db: Session = Depends(get_db),
):
    filters = {"title": title, "minSalary": min_salary, "hasEquity": has_equity}
    filters = {k: v for k, v in filters.items() if v is not None}
    return {"jobs": job_service.find_all(db, filters)}


@router.get("/{job_id}")
def get_job(job_id: int = Path(..., ge=0, le=MAX_JOB_ID), db: Session = Depends(get_db)):
    return {"job": job_service.get(db, job_id)}


@router.patch("/{job_id}", dependencies=[Depends(ensure_admin)])
def update_job(
    payload: JobUpdate,
    job_id: int = Path(..., ge=0, le=MAX_JOB_ID),
    db: Session = Depends(get_db),
):
    return {"job": job_service.update(db, job_id, payload.to_record())}


@router.delete("/{job_id}", dependencies=[Depends(ensure_admin)])
def delete_job(job_id: int = Path(..., ge=0, le=MAX_JOB_ID), db: Session = Depends(get_db)):
    job_service.remove(db, job_id)
    return {"deleted": str(job_id)}
