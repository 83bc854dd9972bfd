"""Proposal API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from src.auth.dependencies import get_gateway, require_user
from src.gateway.session import SessionGateway
from src.proposals.composer import (
    GENERATED_MESSAGE,
    SAVED_MESSAGE,
    compose_proposal,
    list_proposals,
    save_proposal,
)
from src.schemas.proposals import (
    GenerateProposalRequest,
    GenerateProposalResponse,
    ProposalResponse,
    SaveProposalRequest,
    SaveProposalResponse,
)
from src.storage.models import Proposal, User


router = APIRouter(prefix="/api/proposals", tags=["proposals"])


def _to_response(proposal: Proposal) -> ProposalResponse:
    return ProposalResponse(
        id=proposal.id,
        content=proposal.content,
        tone=proposal.tone,
        job_description=proposal.job_description,
        created_at=proposal.created_at,
    )


@router.post("/generate", response_model=GenerateProposalResponse)
def generate_proposal_endpoint(
    payload: GenerateProposalRequest,
    _user: User = Depends(require_user),
) -> GenerateProposalResponse:
    content = compose_proposal(payload.job_description, payload.tone)
    return GenerateProposalResponse(content=content, tone=payload.tone, message=GENERATED_MESSAGE)


@router.post("", response_model=SaveProposalResponse, status_code=201)
def save_proposal_endpoint(
    payload: SaveProposalRequest,
    gateway: SessionGateway = Depends(get_gateway),
) -> SaveProposalResponse:
    proposal = save_proposal(
        gateway,
        content=payload.content,
        tone=payload.tone,
        job_description=payload.job_description,
    )
    return SaveProposalResponse(proposal=_to_response(proposal), message=SAVED_MESSAGE)


@router.get("", response_model=list[ProposalResponse])
def list_proposals_endpoint(
    gateway: SessionGateway = Depends(get_gateway),
    _user: User = Depends(require_user),
) -> list[ProposalResponse]:
    return [_to_response(proposal) for proposal in list_proposals(gateway)]
