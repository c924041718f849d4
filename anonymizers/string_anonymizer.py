"""Free-text anonymizer based on keyed per-character substitution."""

from .base import AnonymizerKind, BaseAnonymizer, as_bool
from .substitution import SubstitutionTable


class StringAnonymizer(BaseAnonymizer):
    """
    Substitute letters and digits through keyed permutations.

    Output has the same length and character classes as the input, so the
    result still looks like text of the same shape. Non-ASCII characters
    always pass through unchanged. If a preservation character set or
    pattern is configured, the preservation engine is used instead.

    Options:
        preserve_case: Keep lower/upper case classes (default True)
        preserve_spaces: Keep ASCII whitespace (default True)
        preserve_punctuation: Keep ASCII punctuation and symbols (default True)
    """

    kind = AnonymizerKind.STRING

    def __init__(self, cipher):
        super().__init__(cipher)
        self.preserve_case = True
        self.preserve_spaces = True
        self.preserve_punctuation = True

    def set_preserve_case(self, preserve) -> None:
        self._check_mutable()
        self.preserve_case = as_bool(preserve)

    def set_preserve_spaces(self, preserve) -> None:
        self._check_mutable()
        self.preserve_spaces = as_bool(preserve)

    def set_preserve_punctuation(self, preserve) -> None:
        self._check_mutable()
        self.preserve_punctuation = as_bool(preserve)

    def _table_for(self, char: str) -> SubstitutionTable | None:
        tables = self._substitution
        if char in tables.digits:
            return tables.digits
        if char in tables.lower or char in tables.upper:
            if not self.preserve_case:
                return tables.letters_mixed
            return tables.lower if char in tables.lower else tables.upper
        if char in tables.whitespace:
            return None if self.preserve_spaces else tables.whitespace
        if char in tables.punctuation:
            return None if self.preserve_punctuation else tables.punctuation
        return None

    def _anonymize(self, text: str) -> str:
        if self._preservation.active:
            return self._preservation.anonymize(text)

        result = []
        for char in text:
            table = self._table_for(char)
            result.append(table.substitute(char) if table else char)
        return "".join(result)

    def _deanonymize(self, text: str) -> str:
        if self._preservation.active:
            return self._preservation.deanonymize(text)

        # Tables map each class onto itself, so the ciphertext char selects the same table
        result = []
        for char in text:
            table = self._table_for(char)
            result.append(table.restore(char) if table else char)
        return "".join(result)
