"""Protocol definitions for dependency abstraction.

Defines interfaces for external dependencies to enable:
- Dependency Injection
- Easy mocking in tests
- Clear layer boundaries
"""

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class LoggerProtocol(Protocol):
    """Protocol for logging operations.

    Implementations:
    - AnonymizationLogger (production)
    - Mock logger (tests)
    """

    def log(self, message: str) -> None:
        """Log a message."""
        ...

    def setup_file_handler(self, path: Path) -> None:
        """Set up file handler for logging."""
        ...


@runtime_checkable
class AnonymizerProtocol(Protocol):
    """Capability interface shared by every anonymizer variant.

    ``deanonymize`` is fail-open: fields that cannot be decrypted are
    returned unchanged and it does not raise for malformed ciphertext.
    """

    def anonymize(self, text: str) -> str:
        """Return the format-preserving substitute for ``text``."""
        ...

    def deanonymize(self, text: str) -> str:
        """Recover the original of an anonymized value."""
        ...

    def configure(self, **options) -> "AnonymizerProtocol":
        """Apply options by name before first use."""
        ...


@runtime_checkable
class KeyResolverProtocol(Protocol):
    """Resolves a named key to (key_hex, tweak).

    Implementations:
    - KeyStore (production)
    - dict-backed fakes (tests)
    """

    def resolve(self, name: str) -> tuple[str, bytes]:
        """Return key material or raise KeyError."""
        ...


class NullLogger:
    """Null object pattern for logger - does nothing.

    Useful for tests where logging is not needed.
    """

    def log(self, message: str) -> None:
        """Do nothing."""
        pass

    def setup_file_handler(self, path: Path) -> None:
        """Do nothing."""
        pass
