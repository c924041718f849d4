"""Configuration loader for the anonymizer.

This module handles loading and parsing of config.yaml settings.
"""

from pathlib import Path
from typing import Any

import yaml

from fpe import resolve_alphabet

DEFAULT_ANONYMIZER_PROFILES: dict[str, dict[str, Any]] = {
    "EMAIL_ADDRESS": {"kind": "email", "options": {}},
    "PHONE_NUMBER": {"kind": "phone", "options": {}},
    "CREDIT_CARD": {"kind": "credit_card", "options": {}},
}


def load_config(config_path: str | None = None) -> dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. Defaults to config.yaml in project root.

    Returns:
        Configuration dictionary
    """
    if config_path is None:
        # Look for config.yaml in project root (parent of config/)
        config_path = Path(__file__).parent.parent / "config.yaml"
    else:
        config_path = Path(config_path)

    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    return {}


def get_cipher_config(config: dict[str, Any]) -> dict[str, Any]:
    """
    Extract cipher settings.

    Args:
        config: Full configuration dictionary

    Returns:
        Dict with keys:
        - radix: int (size of the default alphabet)
        - tweak: hex string or None (seven zero bytes)
        - alphabet: custom alphabet (a name such as "base64" is resolved) or None
    """
    cipher = config.get("cipher", {})

    return {
        "radix": cipher.get("radix", 10),
        "tweak": cipher.get("tweak"),
        "alphabet": resolve_alphabet(cipher.get("alphabet")),
    }


def get_anonymizer_profiles(config: dict[str, Any]) -> dict[str, dict[str, Any]]:
    """
    Get the anonymizer used for each entity type in span masking.

    Example config:
        anonymizers:
          PHONE_NUMBER:
            kind: phone
            options:
              preserve_leading_digits: 3

    Args:
        config: Configuration dictionary

    Returns:
        Dict mapping entity type to {"kind": str, "options": dict}
    """
    profiles = config.get("anonymizers")
    if profiles is None:
        profiles = DEFAULT_ANONYMIZER_PROFILES

    return {
        entity_type: {
            "kind": (profile or {}).get("kind", "string"),
            "options": dict((profile or {}).get("options") or {}),
        }
        for entity_type, profile in profiles.items()
    }


def get_recognizer_entities(config: dict[str, Any]) -> list[str]:
    """
    Get the entity types the recognizers should look for.

    Args:
        config: Configuration dictionary

    Returns:
        List of entity type strings
    """
    return config.get("recognizers", {}).get(
        "entities", list(DEFAULT_ANONYMIZER_PROFILES)
    )


def get_keystore_config(config: dict[str, Any]) -> dict[str, Any]:
    """Key store file location and PBKDF2 iteration count."""
    keystore = config.get("keystore", {})
    return {
        "path": keystore.get("path", "keystore.dat"),
        "iterations": keystore.get("iterations", 10000),
    }


def get_logging_config(config: dict[str, Any]) -> dict[str, Any]:
    """
    Get logging settings.

    Returns:
        Dict with keys:
        - level: logging level name for module loggers
        - audit_log: path of the audit log file, or None
    """
    logging_cfg = config.get("logging", {})
    return {
        "level": logging_cfg.get("level", "WARNING"),
        "audit_log": logging_cfg.get("audit_log"),
    }
