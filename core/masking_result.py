"""Masking Result - Structured result for span masking.

Provides immutable data classes for masking operation results. The
``items`` are presidio OperatorResult objects describing each replaced span
in the masked text; they are what :meth:`Masker.unmask` needs.
"""

from dataclasses import dataclass, field
from typing import Any

from presidio_anonymizer.entities import OperatorResult


@dataclass(frozen=True)
class EntityInfo:
    """Information about a single anonymized entity.

    Only the type and position are kept; the original value is not.

    Attributes:
        entity_type: Type of entity (e.g., "PHONE_NUMBER")
        score: Confidence score (0.0 - 1.0)
        start: Start position in original text
        end: End position in original text
    """
    entity_type: str
    score: float
    start: int
    end: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "type": self.entity_type,
            "score": self.score,
            "start": self.start,
            "end": self.end,
        }


@dataclass(frozen=True)
class MaskingStats:
    """Statistics about the masking operation.

    Attributes:
        total_entities: Total number of entities anonymized
        entities_by_type: Count of entities by type
    """
    total_entities: int
    entities_by_type: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class MaskingResult:
    """Result of a masking operation.

    Attributes:
        masked_text: Text with PII replaced by format-preserving substitutes
        entities: EntityInfo per anonymized span (positions in the original text)
        items: OperatorResult per span (positions in the masked text)
        stats: MaskingStats with counts
    """
    masked_text: str
    entities: tuple[EntityInfo, ...] = field(default_factory=tuple)
    items: tuple[OperatorResult, ...] = field(default_factory=tuple)
    stats: MaskingStats = field(default_factory=lambda: MaskingStats(total_entities=0))

    @classmethod
    def from_engine_result(
        cls,
        masked_text: str,
        analyzer_results: list,
        items: list,
    ) -> "MaskingResult":
        """Create MaskingResult from analyzer results and presidio's EngineResult items.

        Args:
            masked_text: Text after anonymization
            analyzer_results: RecognizerResult list that was anonymized
            items: EngineResult.items from AnonymizerEngine

        Returns:
            MaskingResult instance
        """
        entities = []
        entities_by_type: dict[str, int] = {}

        for result in analyzer_results:
            entities.append(EntityInfo(
                entity_type=result.entity_type,
                score=result.score,
                start=result.start,
                end=result.end,
            ))
            entities_by_type[result.entity_type] = entities_by_type.get(result.entity_type, 0) + 1

        stats = MaskingStats(
            total_entities=len(entities),
            entities_by_type=entities_by_type,
        )

        return cls(
            masked_text=masked_text,
            entities=tuple(sorted(entities, key=lambda e: e.start)),
            items=tuple(sorted(items, key=lambda i: i.start)),
            stats=stats,
        )

    def items_to_dicts(self) -> list[dict[str, Any]]:
        """Serialize items for storage next to the masked text."""
        return [item_to_dict(item) for item in self.items]


def item_to_dict(item: OperatorResult) -> dict[str, Any]:
    return {
        "start": item.start,
        "end": item.end,
        "entity_type": item.entity_type,
        "text": item.text,
        "operator": item.operator,
    }


def item_from_dict(data: dict[str, Any]) -> OperatorResult:
    return OperatorResult(
        start=data["start"],
        end=data["end"],
        entity_type=data["entity_type"],
        text=data.get("text"),
        operator=data.get("operator"),
    )
