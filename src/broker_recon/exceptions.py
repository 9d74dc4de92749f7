"""Custom exceptions for statement reconciliation."""

from __future__ import annotations


class ReconError(Exception):
    """Base exception for broker-recon errors."""


class MissingColumnsError(ReconError):
    """A structurally required column could not be resolved from the header row."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"Missing required columns: {', '.join(missing)}")

