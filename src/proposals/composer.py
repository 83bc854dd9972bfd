"""Proposal text composition and persistence."""

from __future__ import annotations

from src.core.errors import GatewayError, NotAuthenticatedError, ValidationFailed
from src.core.logger import get_logger
from src.core.metrics import record_proposal_saved
from src.gateway.session import Ordering, SessionGateway
from src.storage.models import Proposal, Tone


logger = get_logger("freelance_flow.proposals")

TONE_OPENINGS: dict[Tone, str] = {
    Tone.PROFESSIONAL: "I am writing to express my strong interest in your project",
    Tone.FRIENDLY: "Hi there! I'm really excited about the opportunity to work on your project",
    Tone.PERSUASIVE: "Your project caught my attention because it aligns perfectly with my expertise",
}

PROPOSAL_BODY = (
    "I bring extensive experience in delivering high-quality solutions that exceed client expectations. "
    "My approach combines technical excellence with clear communication, ensuring your project succeeds.\n\n"
    "Key deliverables:\n"
    "• Complete project implementation\n"
    "• Regular progress updates\n"
    "• Quality assurance and testing\n"
    "• Post-delivery support\n\n"
    "I'm confident I can deliver exceptional results for your project. "
    "Let's discuss how we can work together to bring your vision to life.\n\n"
    "Best regards"
)

MISSING_DESCRIPTION_MESSAGE = "Please enter a job description"
GENERATED_MESSAGE = "Proposal generated successfully!"
EMPTY_CONTENT_MESSAGE = "No proposal to save"
LOGIN_REQUIRED_MESSAGE = "Please log in to save proposals"
SAVE_FAILED_MESSAGE = "Error saving proposal"
SAVED_MESSAGE = "Proposal saved successfully!"


def compose_proposal(job_description: str, tone: Tone | str) -> str:
    """Build proposal text from the tone's fixed opening and the verbatim description."""

    if not job_description or not job_description.strip():
        raise ValidationFailed(MISSING_DESCRIPTION_MESSAGE)

    opening = TONE_OPENINGS[Tone(tone)]
    return f"{opening}. Based on your requirements:\n\n{job_description}\n\n{PROPOSAL_BODY}"


def save_proposal(
    gateway: SessionGateway,
    *,
    content: str,
    tone: Tone | str,
    job_description: str,
) -> Proposal:
    if not content:
        raise ValidationFailed(EMPTY_CONTENT_MESSAGE)

    tone_value = Tone(tone).value
    if gateway.get_current_user() is None:
        raise NotAuthenticatedError(LOGIN_REQUIRED_MESSAGE)

    try:
        proposal = gateway.insert_row(
            "proposals",
            {
                "content": content,
                "tone": tone_value,
                "job_description": job_description,
            },
        )
    except GatewayError as exc:
        raise GatewayError(SAVE_FAILED_MESSAGE) from exc

    record_proposal_saved(tone=tone_value)
    logger.info("proposal_saved", proposal_id=proposal.id, tone=tone_value)
    return proposal


def list_proposals(gateway: SessionGateway) -> list[Proposal]:
    return gateway.query_rows("proposals", ordering=Ordering("created_at", descending=True))
