from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    def to_record(self) -> dict[str, Any]:
        """Fields the client actually sent, keyed by their API (camelCase) names."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class CompanyNew(CamelModel):
    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: str
    num_employees: int | None = Field(None, ge=0)
    logo_url: str | None = None


class CompanyUpdate(CamelModel):
    name: str | None = Field(None, min_length=1)
    description: str | None = None
    num_employees: int | None = Field(None, ge=0)
    logo_url: str | None = None


class JobNew(CamelModel):
    title: str = Field(..., min_length=1)
    salary: int | None = Field(None, ge=0)
    equity: float | None = Field(None, ge=0, le=1.0)
    company_handle: str = Field(..., min_length=1, max_length=25)


class JobUpdate(CamelModel):
    title: str | None = Field(None, min_length=1)
    salary: int | None = Field(None, ge=0)
    equity: float | None = Field(None, ge=0, le=1.0)
