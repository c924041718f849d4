"""Regex recognizers for the structured PII the anonymizers handle."""

from typing import List, Optional

from presidio_analyzer import Pattern, PatternRecognizer


class EmailRecognizer(PatternRecognizer):
    """
    Recognizer for email addresses.

    Matches ``local@domain.tld`` with the usual local-part punctuation.
    """

    PATTERNS = [
        Pattern(
            name="email_address",
            regex=r"\b[A-Za-z0-9._%+\-]+@[A-Za-z0-9.\-]+\.[A-Za-z]{2,}\b",
            score=0.85,
        ),
    ]

    CONTEXT = ["email", "e-mail", "mail", "contact"]

    def __init__(
        self,
        patterns: Optional[List[Pattern]] = None,
        context: Optional[List[str]] = None,
        supported_language: str = "en",
        supported_entity: str = "EMAIL_ADDRESS",
    ):
        patterns = patterns if patterns else self.PATTERNS
        context = context if context else self.CONTEXT
        super().__init__(
            supported_entity=supported_entity,
            patterns=patterns,
            context=context,
            supported_language=supported_language,
        )


class PhoneNumberRecognizer(PatternRecognizer):
    """
    Recognizer for phone numbers.

    Supports formats:
    - International: +40 721 234 567, +1 (555) 123-4567, +44 20 7946 0958
    - North American national: (555) 123-4567, 555-123-4567, 555.123.4567
    """

    PATTERNS = [
        Pattern(
            name="phone_international",
            regex=r"\+\d{1,3}(?:[ .\-]?\(?\d{1,4}\)?){2,5}(?!\d)",
            score=0.7,
        ),
        Pattern(
            name="phone_national",
            regex=r"(?<![\d+])\(?\d{3}\)?[ .\-]\d{3}[ .\-]\d{4}(?!\d)",
            score=0.6,
        ),
    ]

    CONTEXT = ["phone", "tel", "mobile", "cell", "call", "fax"]

    def __init__(
        self,
        patterns: Optional[List[Pattern]] = None,
        context: Optional[List[str]] = None,
        supported_language: str = "en",
        supported_entity: str = "PHONE_NUMBER",
    ):
        patterns = patterns if patterns else self.PATTERNS
        context = context if context else self.CONTEXT
        super().__init__(
            supported_entity=supported_entity,
            patterns=patterns,
            context=context,
            supported_language=supported_language,
        )


class CreditCardNumberRecognizer(PatternRecognizer):
    """
    Recognizer for payment card numbers.

    Matches 13-19 digits, optionally grouped by spaces or dashes, and keeps
    only candidates that pass the Luhn checksum.
    """

    PATTERNS = [
        Pattern(
            name="credit_card_grouped",
            regex=r"(?<!\d)\d{4}(?:[ \-]\d{4}){2}[ \-]\d{1,7}(?!\d)",
            score=0.8,
        ),
        Pattern(
            name="credit_card_plain",
            regex=r"(?<!\d)\d{13,19}(?!\d)",
            score=0.6,
        ),
    ]

    CONTEXT = ["card", "credit", "visa", "mastercard", "amex", "payment"]

    def __init__(
        self,
        patterns: Optional[List[Pattern]] = None,
        context: Optional[List[str]] = None,
        supported_language: str = "en",
        supported_entity: str = "CREDIT_CARD",
    ):
        patterns = patterns if patterns else self.PATTERNS
        context = context if context else self.CONTEXT
        super().__init__(
            supported_entity=supported_entity,
            patterns=patterns,
            context=context,
            supported_language=supported_language,
        )

    def validate_result(self, pattern_text: str) -> Optional[bool]:
        """Luhn checksum over the digits of the match."""
        digits = [int(c) for c in pattern_text if c.isdigit()]
        if not 13 <= len(digits) <= 19:
            return False
        return luhn_checksum(digits) == 0


def luhn_checksum(digits: List[int]) -> int:
    total = 0
    for i, digit in enumerate(reversed(digits)):
        if i % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10


def create_default_recognizers(supported_language: str = "en") -> List[PatternRecognizer]:
    """Create the email, phone and credit-card recognizers."""
    return [
        EmailRecognizer(supported_language=supported_language),
        PhoneNumberRecognizer(supported_language=supported_language),
        CreditCardNumberRecognizer(supported_language=supported_language),
    ]
