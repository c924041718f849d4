"""Span masking and session scope.

This package contains:
- masker: Masker class for span anonymization (with DI support)
- operators: presidio operators backed by our anonymizers
- processors: Result processing
- protocols: Protocol definitions for dependency abstraction
- masking_result: Structured result classes
- session: AnonymizationSession, the explicit cipher scope
"""

from .masker import Masker, build_anonymizers
from .masking_result import EntityInfo, MaskingResult, MaskingStats, item_from_dict, item_to_dict
from .operators import FpeAnonymize, FpeDeanonymize
from .protocols import AnonymizerProtocol, KeyResolverProtocol, LoggerProtocol, NullLogger
from .session import AnonymizationSession

__all__ = [
    # Domain
    "Masker",
    "build_anonymizers",
    "MaskingResult",
    "EntityInfo",
    "MaskingStats",
    "item_from_dict",
    "item_to_dict",
    "AnonymizationSession",
    # Operators
    "FpeAnonymize",
    "FpeDeanonymize",
    # Protocols
    "LoggerProtocol",
    "AnonymizerProtocol",
    "KeyResolverProtocol",
    "NullLogger",
]
