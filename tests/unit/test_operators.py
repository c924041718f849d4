"""Unit tests for the presidio operators."""

import pytest
from presidio_anonymizer.entities import InvalidParamError
from presidio_anonymizer.operators import OperatorType

from anonymizers import PhoneNumberAnonymizer
from core.operators import ANONYMIZER_PARAM, FpeAnonymize, FpeDeanonymize


class TestFpeAnonymize:
    """FpeAnonymize operator."""

    def test_operate(self, cipher):
        """operate delegates to the anonymizer in the params."""
        anonymizer = PhoneNumberAnonymizer(cipher)
        params = {ANONYMIZER_PARAM: anonymizer}
        token = FpeAnonymize().operate("+40 721 234 567", params)
        assert token == PhoneNumberAnonymizer(cipher).anonymize("+40 721 234 567")

    def test_name_and_type(self):
        """Registered under its own name as an anonymize operator."""
        operator = FpeAnonymize()
        assert operator.operator_name() == "fpe_anonymize"
        assert operator.operator_type() == OperatorType.Anonymize

    @pytest.mark.parametrize("params", [None, {}, {ANONYMIZER_PARAM: "not an anonymizer"}])
    def test_validate_rejects_bad_params(self, params):
        """Missing or unusable anonymizers are invalid params."""
        with pytest.raises(InvalidParamError):
            FpeAnonymize().validate(params)


class TestFpeDeanonymize:
    """FpeDeanonymize operator."""

    def test_operate(self, cipher):
        """operate reverses FpeAnonymize."""
        params = {ANONYMIZER_PARAM: PhoneNumberAnonymizer(cipher)}
        token = FpeAnonymize().operate("+40 721 234 567", params)
        assert FpeDeanonymize().operate(token, params) == "+40 721 234 567"

    def test_name_and_type(self):
        """Registered under its own name as a deanonymize operator."""
        operator = FpeDeanonymize()
        assert operator.operator_name() == "fpe_deanonymize"
        assert operator.operator_type() == OperatorType.Deanonymize

    def test_validate_accepts_anonymizer(self, cipher):
        """An anonymizer instance is valid."""
        FpeDeanonymize().validate({ANONYMIZER_PARAM: PhoneNumberAnonymizer(cipher)})
