from __future__ import annotations

import pytest
from sqlalchemy import func, select

from src.core.errors import GatewayError, NotAuthenticatedError, ValidationFailed
from src.gateway.session import SessionGateway
from src.proposals.composer import TONE_OPENINGS, compose_proposal, list_proposals, save_proposal
from src.storage.models import Proposal, Tone

from tests.conftest import auth_context_for


def _proposal_count(session_factory) -> int:
    with session_factory() as session:
        return int(session.scalar(select(func.count()).select_from(Proposal)) or 0)


@pytest.mark.parametrize("description", ["", "   ", "\n\t  \n"])
def test_blank_description_is_rejected(description: str) -> None:
    with pytest.raises(ValidationFailed) as exc_info:
        compose_proposal(description, Tone.PROFESSIONAL)
    assert exc_info.value.message == "Please enter a job description"


@pytest.mark.parametrize("tone", list(Tone))
def test_each_tone_starts_with_its_opening_and_keeps_description(tone: Tone) -> None:
    description = "  Build a Django dashboard\nwith charts and auth.  "

    text = compose_proposal(description, tone)

    assert text.startswith(TONE_OPENINGS[tone])
    assert description in text
    assert text.endswith("Best regards")


def test_tone_openings_are_distinct_and_accept_string_values() -> None:
    assert len(set(TONE_OPENINGS.values())) == 3
    assert compose_proposal("Job", "friendly") == compose_proposal("Job", Tone.FRIENDLY)
    assert compose_proposal("Job", "persuasive").startswith(
        "Your project caught my attention because it aligns perfectly with my expertise. Based on your requirements:"
    )


def test_unknown_tone_is_a_contract_violation() -> None:
    with pytest.raises(ValueError):
        compose_proposal("Job", "sarcastic")


def test_composition_is_deterministic() -> None:
    assert compose_proposal("Same job", Tone.PROFESSIONAL) == compose_proposal("Same job", Tone.PROFESSIONAL)


def test_save_with_empty_content_writes_nothing(gateway, session_factory) -> None:
    with pytest.raises(ValidationFailed) as exc_info:
        save_proposal(gateway, content="", tone=Tone.PROFESSIONAL, job_description="Job")

    assert exc_info.value.message == "No proposal to save"
    assert _proposal_count(session_factory) == 0


def test_save_without_user_writes_nothing(anonymous_gateway, session_factory) -> None:
    with pytest.raises(NotAuthenticatedError) as exc_info:
        save_proposal(anonymous_gateway, content="Some text", tone=Tone.FRIENDLY, job_description="Job")

    assert exc_info.value.message == "Please log in to save proposals"
    assert _proposal_count(session_factory) == 0


def test_save_persists_edited_content(gateway, user) -> None:
    generated = compose_proposal("Landing page redesign", Tone.PERSUASIVE)
    edited = generated.replace("Best regards", "Cheers, Sam")

    proposal = save_proposal(
        gateway,
        content=edited,
        tone=Tone.PERSUASIVE,
        job_description="Landing page redesign",
    )

    assert proposal.user_id == user.id
    stored = list_proposals(gateway)
    assert len(stored) == 1
    assert stored[0].content == edited
    assert stored[0].tone == "persuasive"
    assert stored[0].job_description == "Landing page redesign"


def test_save_reports_storage_failure(session_factory, user, revocations, monkeypatch) -> None:
    gateway = SessionGateway(session_factory, auth_context_for(user), revocations)

    def failing_insert(table, record):
        raise GatewayError()

    monkeypatch.setattr(gateway, "insert_row", failing_insert)

    with pytest.raises(GatewayError) as exc_info:
        save_proposal(gateway, content="text", tone=Tone.PROFESSIONAL, job_description="Job")
    assert exc_info.value.message == "Error saving proposal"
