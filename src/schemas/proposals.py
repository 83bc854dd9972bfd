"""Pydantic schemas for proposal endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from src.storage.models import Tone


class GenerateProposalRequest(BaseModel):
    job_description: str = Field(default="", max_length=20_000)
    tone: Tone = Tone.PROFESSIONAL


class GenerateProposalResponse(BaseModel):
    content: str
    tone: Tone
    message: str


class SaveProposalRequest(BaseModel):
    content: str = Field(default="", max_length=40_000)
    tone: Tone = Tone.PROFESSIONAL
    job_description: str = Field(default="", max_length=20_000)


class ProposalResponse(BaseModel):
    id: str
    content: str
    tone: Tone
    job_description: str
    created_at: datetime


class SaveProposalResponse(BaseModel):
    proposal: ProposalResponse
    message: str
