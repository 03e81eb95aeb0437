from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..auth import ensure_admin
from ..database import get_db
from ..errors import BadRequestError
from ..schemas import CompanyNew, CompanyUpdate
from ..services import company_service

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.post("", status_code=201, dependencies=[Depends(ensure_admin)])
def create_company(payload: CompanyNew, db: Session = Depends(get_db)):
    return {"company": company_service.create(db, payload.to_record())}


@router.get("")
def list_companies(
    min_employees: int | None = Query(None, alias="minEmployees", ge=0),
    max_employees: int | None = Query(None, alias="maxEmployees", ge=0),
    name_like: str | None = Query(None, alias="nameLike"),
    db: Session = Depends(get_db),
):
    if min_employees is not None and max_employees is not None and min_employees > max_employees:
        raise BadRequestError("minEmployees cannot be greater than maxEmployees")

    filters = {"minEmployees": min_employees, "maxEmployees": max_employees, "nameLike": name_like}
    filters = {k: v for k, v in filters.items() if v is not None}
    return {"companies": company_service.find_all(db, filters)}


@router.get("/{handle}")
def get_company(handle: str, db: Session = Depends(get_db)):
    return {"company": company_service.get(db, handle)}


@router.patch("/{handle}", dependencies=[Depends(ensure_admin)])
def update_company(handle: str, payload: CompanyUpdate, db: Session = Depends(get_db)):
    return {"company": company_service.update(db, handle, payload.to_record())}


@router.delete("/{handle}", dependencies=[Depends(ensure_admin)])
def delete_company(handle: str, db: Session = Depends(get_db)):
    company_service.remove(db, handle)
    return {"deleted": handle}
