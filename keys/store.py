"""Password-protected key store.

File layout: a 16-byte random salt followed by AES-256-CBC (PKCS7 padding)
ciphertext of a JSON list ``[{"Name": ..., "Key": ..., "TweakHex": ...}]``.
The AES key and IV are the first 32 and next 16 bytes of
PBKDF2-HMAC-SHA1(password, salt, iterations).
"""

import json
import logging
import secrets
from pathlib import Path

from cryptography.hazmat.primitives import hashes, padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from fpe import KeyStoreError

from .key_pair import KeyTweakPair

logger = logging.getLogger(__name__)

SALT_SIZE = 16
AES_KEY_SIZE = 32
IV_SIZE = 16
DEFAULT_ITERATIONS = 10000


def _derive_key_iv(password: str, salt: bytes, iterations: int) -> tuple[bytes, bytes]:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA1(),
        length=AES_KEY_SIZE + IV_SIZE,
        salt=salt,
        iterations=iterations,
    )
    material = kdf.derive(password.encode("utf-8"))
    return material[:AES_KEY_SIZE], material[AES_KEY_SIZE:]


def encrypt_blob(data: bytes, password: str, iterations: int = DEFAULT_ITERATIONS) -> bytes:
    salt = secrets.token_bytes(SALT_SIZE)
    key, iv = _derive_key_iv(password, salt, iterations)

    padder = padding.PKCS7(algorithms.AES.block_size).padder()
    padded = padder.update(data) + padder.finalize()

    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    return salt + encryptor.update(padded) + encryptor.finalize()


def decrypt_blob(blob: bytes, password: str, iterations: int = DEFAULT_ITERATIONS) -> bytes:
    """
    Inverse of :func:`encrypt_blob`.

    Raises:
        KeyStoreError: Truncated data, wrong password or corrupt padding
    """
    ciphertext = blob[SALT_SIZE:]
    if len(blob) <= SALT_SIZE or len(ciphertext) % IV_SIZE:
        raise KeyStoreError("Key store data is truncated or corrupt")

    key, iv = _derive_key_iv(password, blob[:SALT_SIZE], iterations)
    decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
    padded = decryptor.update(ciphertext) + decryptor.finalize()

    unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
    try:
        return unpadder.update(padded) + unpadder.finalize()
    except ValueError as e:
        raise KeyStoreError("Cannot decrypt key store: wrong password or corrupt file") from e


class KeyStore:
    """
    Named key/tweak pairs persisted in an encrypted file.

    The file is loaded on construction (if it exists) and rewritten on every
    :meth:`add`.

    Args:
        path: Key store file path
        password: Password protecting the file
        iterations: PBKDF2 iteration count

    Raises:
        KeyStoreError: If an existing file cannot be read or decrypted
    """

    def __init__(self, path: str | Path, password: str, iterations: int = DEFAULT_ITERATIONS):
        self.path = Path(path)
        self.iterations = iterations
        self._password = password
        self._pairs: dict[str, KeyTweakPair] = {}

        if self.path.exists():
            self._load()

    def __contains__(self, name: str) -> bool:
        return name in self._pairs

    def __len__(self) -> int:
        return len(self._pairs)

    def add(self, pair: KeyTweakPair) -> None:
        """Add or replace a pair (by name) and save the store."""
        self._pairs[pair.name] = pair
        self.save()

    def get(self, name: str) -> KeyTweakPair | None:
        return self._pairs.get(name)

    def resolve(self, name: str) -> tuple[str, bytes]:
        """
        Look up key material by name.

        Returns:
            (key_hex, tweak)

        Raises:
            KeyError: If no pair has this name
        """
        pair = self._pairs.get(name)
        if pair is None:
            raise KeyError(f"No key pair named {name!r} in {self.path}")
        return pair.key, pair.tweak

    def names(self) -> list[str]:
        return list(self._pairs)

    def save(self) -> None:
        records = [
            {"Name": pair.name, "Key": pair.key, "TweakHex": pair.tweak_hex.upper()}
            for pair in self._pairs.values()
        ]
        data = json.dumps(records).encode("utf-8")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_bytes(encrypt_blob(data, self._password, self.iterations))
        except OSError as e:
            raise KeyStoreError(f"Cannot write key store {self.path}: {e}") from e
        logger.info(f"[KeyStore] Saved {len(records)} key pair(s) to {self.path}")

    def _load(self) -> None:
        try:
            blob = self.path.read_bytes()
        except OSError as e:
            raise KeyStoreError(f"Cannot read key store {self.path}: {e}") from e

        data = decrypt_blob(blob, self._password, self.iterations)
        try:
            records = json.loads(data.decode("utf-8"))
            pairs = {
                record["Name"]: KeyTweakPair(
                    key=record["Key"],
                    tweak=bytes.fromhex(record["TweakHex"]),
                    name=record["Name"],
                )
                for record in records
            }
        except (ValueError, KeyError, TypeError) as e:
            raise KeyStoreError(f"Key store {self.path} is corrupt: {e}") from e

        self._pairs = pairs
        logger.info(f"[KeyStore] Loaded {len(pairs)} key pair(s) from {self.path}")
