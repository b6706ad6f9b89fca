"""Shared utilities and helpers for the tag_validator package."""

from tag_validator.utils.logging import configure_logging

__all__ = ["configure_logging"]
