"""Domain anonymizers built on the FPE cipher.

This package contains:
- preservation: character and pattern preservation around the cipher
- substitution: keyed permutation tables
- one module per anonymizer variant
- factory: create_anonymizer by AnonymizerKind
"""

from .base import AnonymizerKind, BaseAnonymizer
from .credit_card_anonymizer import CreditCardAnonymizer
from .email_anonymizer import EmailAnonymizer
from .factory import ANONYMIZER_CLASSES, create_anonymizer, parse_kind
from .generic_anonymizer import GenericAnonymizer
from .name_anonymizer import NameAnonymizer
from .numeric_anonymizer import NumericAnonymizer
from .phone_anonymizer import COUNTRY_CODES, NanpPhoneAnonymizer, PhoneNumberAnonymizer
from .preservation import CharacterPreserver, PatternPreserver, PreservationEngine
from .string_anonymizer import StringAnonymizer
from .substitution import SubstitutionAlphabets, SubstitutionTable

__all__ = [
    "AnonymizerKind",
    "BaseAnonymizer",
    "create_anonymizer",
    "parse_kind",
    "ANONYMIZER_CLASSES",
    # Variants
    "StringAnonymizer",
    "NameAnonymizer",
    "NumericAnonymizer",
    "PhoneNumberAnonymizer",
    "NanpPhoneAnonymizer",
    "EmailAnonymizer",
    "CreditCardAnonymizer",
    "GenericAnonymizer",
    "COUNTRY_CODES",
    # Building blocks
    "CharacterPreserver",
    "PatternPreserver",
    "PreservationEngine",
    "SubstitutionAlphabets",
    "SubstitutionTable",
]
