"""Anonymizer factory keyed by AnonymizerKind."""

from fpe import ConfigurationError
from fpe.cipher import FF3Cipher

from .base import AnonymizerKind, BaseAnonymizer
from .credit_card_anonymizer import CreditCardAnonymizer
from .email_anonymizer import EmailAnonymizer
from .generic_anonymizer import GenericAnonymizer
from .name_anonymizer import NameAnonymizer
from .numeric_anonymizer import NumericAnonymizer
from .phone_anonymizer import NanpPhoneAnonymizer, PhoneNumberAnonymizer
from .string_anonymizer import StringAnonymizer

ANONYMIZER_CLASSES: dict[AnonymizerKind, type[BaseAnonymizer]] = {
    AnonymizerKind.STRING: StringAnonymizer,
    AnonymizerKind.NAME: NameAnonymizer,
    AnonymizerKind.NUMERIC: NumericAnonymizer,
    AnonymizerKind.PHONE: PhoneNumberAnonymizer,
    AnonymizerKind.PHONE_NANP: NanpPhoneAnonymizer,
    AnonymizerKind.EMAIL: EmailAnonymizer,
    AnonymizerKind.CREDIT_CARD: CreditCardAnonymizer,
    AnonymizerKind.GENERIC: GenericAnonymizer,
}


def parse_kind(kind: AnonymizerKind | str) -> AnonymizerKind:
    """Accept an AnonymizerKind or its value ("phone", "credit-card", ...)."""
    if isinstance(kind, AnonymizerKind):
        return kind
    try:
        return AnonymizerKind(str(kind).strip().lower().replace("-", "_"))
    except ValueError as e:
        available = ", ".join(k.value for k in AnonymizerKind)
        raise ConfigurationError(f"Unknown anonymizer kind: {kind}. Available: {available}") from e


def create_anonymizer(kind: AnonymizerKind | str, cipher: FF3Cipher, **options) -> BaseAnonymizer:
    """
    Create and configure an anonymizer.

    Args:
        kind: Variant to create
        cipher: Cipher shared by the anonymizer
        **options: Variant options, e.g. ``preserve_domain=False``

    Returns:
        Configured anonymizer (not yet frozen)

    Raises:
        ConfigurationError: Unknown kind or option
        NoActiveCipherError: If cipher is None

    Example:
        >>> phone = create_anonymizer("phone", cipher, preserve_leading_digits=3)
        >>> phone.anonymize("+40 721 234 567")
    """
    anonymizer = ANONYMIZER_CLASSES[parse_kind(kind)](cipher)
    return anonymizer.configure(**options)
