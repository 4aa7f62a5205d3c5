"""Read-only projections of what `gh` reports about repositories."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RepositoryDescriptor(BaseModel):
    """One row of `gh repo list --json ...`."""

    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    name: str
    visibility: Optional[str] = None
    url: Optional[str] = None
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    pushed_at: Optional[datetime] = Field(None, alias="pushedAt")


class Secret(BaseModel):
    """Repository secret metadata. The value is never readable."""

    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    name: str
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")


class Variable(BaseModel):
    """Repository Actions variable."""

    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    name: str
    value: str = ""
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")
