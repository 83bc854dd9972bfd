"""Proposal composer."""

from src.proposals.composer import compose_proposal, list_proposals, save_proposal

__all__ = ["compose_proposal", "list_proposals", "save_proposal"]
