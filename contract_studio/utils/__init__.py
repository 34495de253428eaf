"""Utility functions for Contract Studio."""

from contract_studio.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
