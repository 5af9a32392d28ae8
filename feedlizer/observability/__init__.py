"""Logging helpers for provider calls."""

from .logging import ProviderLogger

__all__ = ["ProviderLogger"]
