"""Sidebar navigation shell."""

from src.navigation.menu import Navigation, build_navigation

__all__ = ["Navigation", "build_navigation"]
