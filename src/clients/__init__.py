"""Client registry."""

from src.clients.registry import add_client, list_clients, status_presentation

__all__ = ["add_client", "list_clients", "status_presentation"]
