"""Random and derived FPE key material."""

import secrets

from cryptography.hazmat.primitives import hashes, hmac

from fpe import TWEAK_LEN, InvalidKeyError
from fpe.alphabets import DIGITS

from .key_pair import KeyTweakPair

KEY_SIZE_BYTES = 32  # AES-256
KEY_SUFFIX = "KEY"
TWEAK_SUFFIX = "TWEAK"


def _hmac_sha256(key: bytes, message: str) -> bytes:
    mac = hmac.HMAC(key, hashes.SHA256())
    mac.update(message.encode("utf-8"))
    return mac.finalize()


class KeyGenerator:
    """
    Create key/tweak pairs.

    Usage:
        generator = KeyGenerator()
        pair = generator.generate_key_pair("customers")
        derived = generator.derive_key_pair(pair.key, "customer-42")
    """

    def generate_key_pair(self, name: str = "") -> KeyTweakPair:
        """Generate a random 256-bit key and 56-bit tweak."""
        key = secrets.token_bytes(KEY_SIZE_BYTES)
        tweak = secrets.token_bytes(TWEAK_LEN)
        return KeyTweakPair(key.hex(), tweak, name)

    def derive_key_pair(self, master_key: str, identifier: str) -> KeyTweakPair:
        """
        Derive a pair deterministically from a master key.

        The key is HMAC-SHA256(master, identifier + "KEY"); the tweak is the
        first 7 bytes of HMAC-SHA256(master, identifier + "TWEAK").

        Args:
            master_key: Master key as hex string
            identifier: Record or tenant identifier; also becomes the pair name

        Returns:
            Derived KeyTweakPair

        Raises:
            InvalidKeyError: If master_key is not valid hex or is empty
        """
        try:
            master = bytes.fromhex(master_key)
        except ValueError as e:
            raise InvalidKeyError(f"Master key is not a valid hex string: {e}") from e
        if not master:
            raise InvalidKeyError("Master key must not be empty")

        key = _hmac_sha256(master, identifier + KEY_SUFFIX)
        tweak = _hmac_sha256(master, identifier + TWEAK_SUFFIX)[:TWEAK_LEN]
        return KeyTweakPair(key.hex(), tweak, identifier)

    def derive_phone_key_pair(self, master_key: str, phone_number: str) -> KeyTweakPair:
        """Derive a pair from the digits of a phone number, ignoring formatting."""
        digits = "".join(c for c in phone_number if c in DIGITS)
        return self.derive_key_pair(master_key, digits)
