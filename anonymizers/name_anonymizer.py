"""Personal-name anonymizer."""

import re

from .base import AnonymizerKind, BaseAnonymizer, as_bool
from .substitution import SubstitutionTable

NAME_SEPARATORS = re.compile(r"([ .-])")


class NameAnonymizer(BaseAnonymizer):
    """
    Anonymize names token by token, keeping separators.

    "Jean-Luc Picard" keeps its hyphen, space and the length of every part.
    Letters with diacritics (ă, ș, é, ñ, ...) are permuted among themselves
    unless ``preserve_special_chars`` is set.

    Options:
        preserve_capitalization: Permute within each case class (default True).
            When False, letters are permuted across cases.
        preserve_special_chars: Leave accented letters untouched (default False)
    """

    kind = AnonymizerKind.NAME

    def __init__(self, cipher):
        super().__init__(cipher)
        self.preserve_capitalization = True
        self.preserve_special_chars = False

    def set_preserve_capitalization(self, preserve) -> None:
        self._check_mutable()
        self.preserve_capitalization = as_bool(preserve)

    def set_preserve_special_chars(self, preserve) -> None:
        self._check_mutable()
        self.preserve_special_chars = as_bool(preserve)

    def _table_for(self, char: str) -> SubstitutionTable | None:
        tables = self._substitution
        if char in tables.lower or char in tables.upper:
            if not self.preserve_capitalization:
                return tables.letters_mixed
            return tables.lower if char in tables.lower else tables.upper
        if char in tables.special_mixed:
            if self.preserve_special_chars:
                return None
            if not self.preserve_capitalization:
                return tables.special_mixed
            return tables.special_lower if char in tables.special_lower else tables.special_upper
        return None

    def _transform_token(self, token: str, restore: bool) -> str:
        result = []
        for char in token:
            table = self._table_for(char)
            if table is None:
                result.append(char)
            else:
                result.append(table.restore(char) if restore else table.substitute(char))
        return "".join(result)

    def _transform(self, name: str, restore: bool) -> str:
        parts = NAME_SEPARATORS.split(name)
        # Odd indices hold the captured separators
        return "".join(
            part if i % 2 else self._transform_token(part, restore)
            for i, part in enumerate(parts)
        )

    def _anonymize(self, text: str) -> str:
        if self._preservation.active:
            return self._preservation.anonymize(text)
        return self._transform(text, restore=False)

    def _deanonymize(self, text: str) -> str:
        if self._preservation.active:
            return self._preservation.deanonymize(text)
        return self._transform(text, restore=True)
