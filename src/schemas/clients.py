"""Pydantic schemas for client endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from src.storage.models import ClientStatus


class ClientCreateRequest(BaseModel):
    name: str = Field(default="", max_length=255)
    platform: str = Field(default="", max_length=120)
    status: ClientStatus = ClientStatus.PENDING


class ClientPresentation(BaseModel):
    tone: str
    css_class: str
    label: str


class ClientResponse(BaseModel):
    id: str
    name: str
    platform: str
    status: ClientStatus
    date: datetime
    presentation: ClientPresentation


class ClientCreateResponse(BaseModel):
    client: ClientResponse
    message: str
