"""Statistics, auth and settings API schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel


class MonthlyCollectionModel(BaseModel):
    label: str
    Gauteng: int
    Limpopo: int


class CollectionTotalsModel(BaseModel):
    Gauteng: int
    Limpopo: int
    total: int


class CollectionStatsResponse(BaseModel):
    records: int
    months: List[MonthlyCollectionModel]
    totals: CollectionTotalsModel


class LoginRequest(BaseModel):
    phone: str
    password: str


class LoginResponse(BaseModel):
    id: str
    name: str


class TokenUpdateRequest(BaseModel):
    token: Optional[str] = None


class TokenUpdateResponse(BaseModel):
    live: bool
