from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ControlIn(BaseModel):
    code: str = Field(min_length=1, max_length=30)
    name: str = Field(min_length=1, max_length=200)
    description: str | None = None
    department_id: int | None = None


class ControlOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str
    name: str
    description: str | None
    department_id: int
    created_at: datetime


class RiskIn(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str | None = None
    department_id: int | None = None


class RiskUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None


class RiskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None
    status: str
    department_id: int
    approved_by_id: int | None
    created_at: datetime
