"""Pydantic models for request/response types."""
from __future__ import annotations

from pydantic import BaseModel


class GenerateIn(BaseModel):
    # Optional here so a missing prompt reaches the handler and gets a 400.
    prompt: str | None = None


class GenerateOut(BaseModel):
    success: bool = True
    response: str


class ErrorOut(BaseModel):
    error: str
    message: str | None = None


class HealthOut(BaseModel):
    status: str
    service: str
    timestamp: str


class ServiceInfo(BaseModel):
    name: str
    version: str
    description: str
    endpoints: dict[str, str]
