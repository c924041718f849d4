"""Processors for recognizer results."""

from .result import deduplicate_results

__all__ = ["deduplicate_results"]
