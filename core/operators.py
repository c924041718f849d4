"""presidio operators that route spans through our anonymizers.

The anonymizer instance travels in the operator params:

    OperatorConfig("fpe_anonymize", {"anonymizer": phone_anonymizer})
"""

from typing import Dict

from presidio_anonymizer.entities import InvalidParamError
from presidio_anonymizer.operators import Operator, OperatorType

ANONYMIZER_PARAM = "anonymizer"


def _get_anonymizer(params: Dict | None, method: str):
    anonymizer = (params or {}).get(ANONYMIZER_PARAM)
    if anonymizer is None or not callable(getattr(anonymizer, method, None)):
        raise InvalidParamError(
            f"Invalid parameter value for '{ANONYMIZER_PARAM}': "
            f"expected an object with a {method}() method"
        )
    return anonymizer


class FpeAnonymize(Operator):
    """Replace a span with ``anonymizer.anonymize(span)``."""

    def operate(self, text: str = None, params: Dict = None) -> str:
        return _get_anonymizer(params, "anonymize").anonymize(text)

    def validate(self, params: Dict = None) -> None:
        _get_anonymizer(params, "anonymize")

    def operator_name(self) -> str:
        return "fpe_anonymize"

    def operator_type(self) -> OperatorType:
        return OperatorType.Anonymize


class FpeDeanonymize(Operator):
    """Restore a span with ``anonymizer.deanonymize(span)``."""

    def operate(self, text: str = None, params: Dict = None) -> str:
        return _get_anonymizer(params, "deanonymize").deanonymize(text)

    def validate(self, params: Dict = None) -> None:
        _get_anonymizer(params, "deanonymize")

    def operator_name(self) -> str:
        return "fpe_deanonymize"

    def operator_type(self) -> OperatorType:
        return OperatorType.Deanonymize
