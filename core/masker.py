"""Span Masker - anonymize PII spans inside free text, and reverse it.

This module provides:
- Masker class: recognizers find spans, presidio engines replace them
- build_anonymizers: per-entity anonymizers from config

Layer: Domain
Dependencies: Protocols from core.protocols
"""

from datetime import datetime
from typing import Any, Iterable

from presidio_anonymizer import AnonymizerEngine, DeanonymizeEngine
from presidio_anonymizer.entities import OperatorConfig, OperatorResult

from anonymizers import create_anonymizer
from config import get_anonymizer_profiles, get_recognizer_entities, load_config
from core.masking_result import MaskingResult
from core.operators import ANONYMIZER_PARAM, FpeAnonymize, FpeDeanonymize
from core.processors.result import deduplicate_results
from core.protocols import AnonymizerProtocol, LoggerProtocol, NullLogger
from fpe.cipher import FF3Cipher
from recognizers import create_default_recognizers


def build_anonymizers(config: dict[str, Any], cipher: FF3Cipher) -> dict[str, AnonymizerProtocol]:
    """
    Build per-entity anonymizers from config.

    Reads the ``anonymizers:`` section of config.yaml (entity type ->
    kind and options).

    Args:
        config: Configuration dictionary
        cipher: Cipher shared by all anonymizers

    Returns:
        Dict of entity_type -> anonymizer

    Raises:
        ConfigurationError: Unknown kind or option in the config
    """
    return {
        entity_type: create_anonymizer(profile["kind"], cipher, **profile["options"])
        for entity_type, profile in get_anonymizer_profiles(config).items()
    }


class Masker:
    """Format-preserving span masker with dependency injection.

    Detected spans whose entity type has an anonymizer are replaced with
    that anonymizer's output; other spans are left untouched. The returned
    items allow the exact original text to be restored with :meth:`unmask`.

    Usage:
        masker = Masker(build_anonymizers(config, cipher))
        result = masker.mask("Call +40 721 234 567")
        original = masker.unmask(result.masked_text, result.items)
    """

    def __init__(
        self,
        anonymizers: dict[str, AnonymizerProtocol],
        recognizers: list | None = None,
        logger: LoggerProtocol | None = None,
        config: dict[str, Any] | None = None
    ):
        """Initialize masker with dependencies.

        Args:
            anonymizers: Entity type -> anonymizer
            recognizers: presidio recognizers (default: email, phone, credit card)
            logger: Audit logger (default: NullLogger)
            config: Configuration dict (default: load from config.yaml)
        """
        self.anonymizers = dict(anonymizers)
        self.recognizers = recognizers if recognizers is not None else create_default_recognizers()
        self.logger = logger or NullLogger()
        self.config = config if config is not None else load_config()

        self._entities = set(get_recognizer_entities(self.config))

        self._anonymizer_engine = AnonymizerEngine()
        self._anonymizer_engine.add_anonymizer(FpeAnonymize)
        self._deanonymize_engine = DeanonymizeEngine()
        self._deanonymize_engine.add_deanonymizer(FpeDeanonymize)

    def _operators(self, operator_name: str) -> dict[str, OperatorConfig]:
        return {
            entity_type: OperatorConfig(operator_name, {ANONYMIZER_PARAM: anonymizer})
            for entity_type, anonymizer in self.anonymizers.items()
        }

    def analyze(self, text: str) -> list:
        """Analyze text and return detection results.

        Args:
            text: Text to analyze

        Returns:
            List of non-overlapping RecognizerResult, ordered by position
        """
        results = []
        for recognizer in self.recognizers:
            entities = [e for e in recognizer.supported_entities if e in self._entities]
            if entities:
                results.extend(recognizer.analyze(text=text, entities=entities, nlp_artifacts=None))
        return deduplicate_results(results, text)

    def mask(
        self,
        text: str,
        analyzer_results: list | None = None,
        log_results: bool = True
    ) -> MaskingResult:
        """Anonymize detected spans.

        Args:
            text: Text to analyze and mask
            analyzer_results: Precomputed results (default: run :meth:`analyze`)
            log_results: If True, write entity types and positions to the audit log

        Returns:
            MaskingResult with masked text, entity info and reversible items
        """
        if analyzer_results is None:
            analyzer_results = self.analyze(text)
        results = [r for r in analyzer_results if r.entity_type in self.anonymizers]

        if not results:
            return MaskingResult.from_engine_result(masked_text=text, analyzer_results=[], items=[])

        if log_results:
            self._log_results(results)

        engine_result = self._anonymizer_engine.anonymize(
            text=text,
            analyzer_results=results,
            operators=self._operators("fpe_anonymize"),
        )

        return MaskingResult.from_engine_result(
            masked_text=engine_result.text,
            analyzer_results=results,
            items=engine_result.items,
        )

    def unmask(self, masked_text: str, items: Iterable[OperatorResult]) -> str:
        """Restore the original text from masked text and its items.

        Items for entity types without an anonymizer are ignored.

        Args:
            masked_text: MaskingResult.masked_text
            items: MaskingResult.items

        Returns:
            The original text
        """
        entities = [item for item in items if item.entity_type in self.anonymizers]
        if not entities:
            return masked_text

        engine_result = self._deanonymize_engine.deanonymize(
            text=masked_text,
            entities=entities,
            operators=self._operators("fpe_deanonymize"),
        )
        return engine_result.text

    def _log_results(self, results: list) -> None:
        """Log anonymized entity types and positions.

        Args:
            results: List of RecognizerResult
        """
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        self.logger.log(f"\n{'='*60}")
        self.logger.log(f"Anonymization Log - {timestamp}")
        self.logger.log(f"{'='*60}")
        for result in results:
            self.logger.log(
                f"[{result.entity_type}] "
                f"(score: {result.score:.2f}, pos: {result.start}-{result.end})"
            )
        self.logger.log(f"Total: {len(results)} entities anonymized")
