"""stdout2prom exception hierarchy.

Two families matter at runtime: configuration problems, which are fatal and
only ever raised during startup, and per-line extraction problems, which the
engine counts and recovers from.
"""
from __future__ import annotations


class Stdout2PromException(Exception):
    """Base class for all stdout2prom exceptions."""


class ConfigError(Stdout2PromException):
    """Configuration-related issues (unreadable file, schema errors, bad patterns)."""


class ExtractionError(Stdout2PromException):
    """A matched line could not supply a value or label for its metric."""

    def __init__(self, metric: str, reason: str):
        super().__init__(f"{metric}: {reason}")
        self.metric = metric
        self.reason = reason


class LabelLookupError(ExtractionError):
    """A declared label could not be read from the match."""


__all__ = [
    "Stdout2PromException",
    "ConfigError",
    "ExtractionError",
    "LabelLookupError",
]
