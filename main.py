#!/usr/bin/env python3
"""Format-preserving anonymizer CLI.

Sub-commands:
- generate-key / derive-key: create FPE key material
- anonymize / deanonymize: transform a single value with one anonymizer
- mask / unmask: anonymize PII spans inside a text file, and restore them
"""

import argparse
import json
import os
import sys
from pathlib import Path

from anonymization_logging import AnonymizationLogger, configure_logging
from anonymizers import AnonymizerKind
from config import get_cipher_config, get_keystore_config, get_logging_config, load_config
from core import AnonymizationSession, item_from_dict
from fpe import AnonymizationError, ConfigurationError, resolve_alphabet
from fpe.cipher import FF3Cipher
from keys import KeyGenerator, KeyStore

PASSWORD_ENV = "ANONYMIZER_KEYSTORE_PASSWORD"
ITEMS_SUFFIX = ".items.json"


def parse_options(pairs: list[str] | None) -> dict[str, str]:
    """Turn ``["preserve_domain=false", ...]`` into a dict."""
    options = {}
    for pair in pairs or []:
        name, sep, value = pair.partition("=")
        if not sep or not name.strip():
            raise ConfigurationError(f"Option must be NAME=VALUE, got: {pair}")
        options[name.strip()] = value
    return options


def _keystore_password(args) -> str:
    password = args.password or os.environ.get(PASSWORD_ENV)
    if not password:
        raise ConfigurationError(f"Key store password required (--password or {PASSWORD_ENV})")
    return password


def _open_keystore(args, config: dict) -> KeyStore:
    keystore_cfg = get_keystore_config(config)
    path = args.keystore or keystore_cfg["path"]
    return KeyStore(path, _keystore_password(args), iterations=keystore_cfg["iterations"])


def open_session(args, config: dict) -> AnonymizationSession:
    """Build a session from --key/--tweak or --keystore/--key-name."""
    cipher_cfg = get_cipher_config(config)
    radix = args.radix or cipher_cfg["radix"]
    alphabet = resolve_alphabet(args.alphabet) or cipher_cfg["alphabet"]

    if args.key:
        tweak = args.tweak or cipher_cfg["tweak"]
        return AnonymizationSession(FF3Cipher(args.key, tweak, radix=radix, alphabet=alphabet))
    if args.key_name:
        store = _open_keystore(args, config)
        return AnonymizationSession.from_key_store(store, args.key_name, radix=radix, alphabet=alphabet)
    raise ConfigurationError("Provide --key, or --key-name with a key store")


def cmd_generate_key(args, config: dict) -> int:
    pair = KeyGenerator().generate_key_pair(args.name or "")
    if args.tweak_only:
        print(pair.tweak_hex)
        return 0

    if args.keystore:
        if not args.name:
            raise ConfigurationError("--name is required when saving to a key store")
        _open_keystore(args, config).add(pair)
        print(f"Saved key '{pair.name}' to {args.keystore}", file=sys.stderr)
    print(f"key:   {pair.key}")
    print(f"tweak: {pair.tweak_hex}")
    return 0


def cmd_derive_key(args, config: dict) -> int:
    generator = KeyGenerator()
    if args.phone:
        pair = generator.derive_phone_key_pair(args.master, args.identifier)
    else:
        pair = generator.derive_key_pair(args.master, args.identifier)
    print(f"key:   {pair.key}")
    print(f"tweak: {pair.tweak_hex}")
    return 0


def cmd_transform(args, config: dict) -> int:
    options = parse_options(args.option)
    with open_session(args, config) as session:
        anonymizer = session.create_anonymizer(args.kind, **options)
        if args.command == "anonymize":
            print(anonymizer.anonymize(args.value))
        else:
            print(anonymizer.deanonymize(args.value))
    return 0


def _audit_logger(args, config: dict) -> AnonymizationLogger:
    logger = AnonymizationLogger()
    log_path = args.log or get_logging_config(config)["audit_log"]
    if log_path:
        logger.setup_file_handler(Path(log_path))
    return logger


def cmd_mask(args, config: dict) -> int:
    input_path = Path(args.input_file)
    if not input_path.exists():
        print(f"Error: File {input_path} not found.", file=sys.stderr)
        return 1

    output_path = Path(args.output) if args.output else Path("output") / f"{input_path.stem}.masked.txt"
    items_path = Path(args.items) if args.items else output_path.with_name(output_path.name + ITEMS_SUFFIX)

    text = input_path.read_text(encoding="utf-8")
    logger = _audit_logger(args, config)
    try:
        with open_session(args, config) as session:
            result = session.create_masker(config, logger=logger).mask(text)
    finally:
        logger.close()

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(result.masked_text, encoding="utf-8")
    items_path.write_text(json.dumps(result.items_to_dicts(), indent=2), encoding="utf-8")

    print(f"Masked {result.stats.total_entities} entities -> {output_path}", file=sys.stderr)
    for entity_type, count in sorted(result.stats.entities_by_type.items()):
        print(f"  {entity_type}: {count}", file=sys.stderr)
    return 0


def cmd_unmask(args, config: dict) -> int:
    input_path = Path(args.input_file)
    items_path = Path(args.items) if args.items else input_path.with_name(input_path.name + ITEMS_SUFFIX)
    for path in (input_path, items_path):
        if not path.exists():
            print(f"Error: File {path} not found.", file=sys.stderr)
            return 1

    masked_text = input_path.read_text(encoding="utf-8")
    items = [item_from_dict(d) for d in json.loads(items_path.read_text(encoding="utf-8"))]

    with open_session(args, config) as session:
        text = session.create_masker(config).unmask(masked_text, items)

    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)
    return 0


def _add_key_arguments(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group("key source")
    group.add_argument("--key", help="AES key as hex (32 bytes recommended)")
    group.add_argument("--tweak", help="7-byte tweak as hex (default: config or zero tweak)")
    group.add_argument("--keystore", help="Key store file (default: config keystore.path)")
    group.add_argument("--key-name", help="Name of the key in the key store")
    group.add_argument("--password", help=f"Key store password (or set {PASSWORD_ENV})")
    parser.add_argument("--radix", type=int, help="Radix of the default alphabet")
    parser.add_argument("--alphabet", help="Cipher alphabet: symbols, or a name (digits, hex, base64, extended_latin, ...)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Format-preserving anonymization of phone numbers, emails, names, numbers and cards.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Create a key
  python main.py generate-key

  # Anonymize a phone number, keeping the country code
  python main.py anonymize --kind phone --key <hex> "+40 721 234 567"

  # Keep two decimal places of a number
  python main.py anonymize --kind numeric --key <hex> --option preserve_decimal_places=2 -- -123.4567

  # Anonymize PII in a text file and restore it later
  python main.py mask notes.txt --key <hex> -o output/notes.txt
  python main.py unmask output/notes.txt --key <hex>
        """
    )
    parser.add_argument("--config", help="Path to config.yaml (default: project root)")
    parser.add_argument("--log-level", help="Console log level (default: config logging.level)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate-key", help="Generate a random key and tweak")
    generate.add_argument("--name", help="Key name")
    generate.add_argument("--tweak-only", action="store_true", help="Print only a new tweak")
    generate.add_argument("--keystore", help="Save the new key to this key store")
    generate.add_argument("--password", help=f"Key store password (or set {PASSWORD_ENV})")
    generate.set_defaults(handler=cmd_generate_key)

    derive = subparsers.add_parser("derive-key", help="Derive a key and tweak from a master key")
    derive.add_argument("--master", required=True, help="Master key as hex")
    derive.add_argument("--identifier", required=True, help="Identifier to derive for")
    derive.add_argument("--phone", action="store_true", help="Treat identifier as a phone number")
    derive.set_defaults(handler=cmd_derive_key)

    kinds = [kind.value for kind in AnonymizerKind]
    for name, help_text in (("anonymize", "Anonymize a value"), ("deanonymize", "Recover a value")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--kind", required=True, choices=kinds, help="Anonymizer variant")
        sub.add_argument(
            "--option", action="append", metavar="NAME=VALUE",
            help="Anonymizer option, e.g. preserve_domain=false (repeatable)"
        )
        sub.add_argument("value", help="Value to transform")
        _add_key_arguments(sub)
        sub.set_defaults(handler=cmd_transform)

    mask = subparsers.add_parser("mask", help="Anonymize PII spans in a text file")
    mask.add_argument("input_file", help="UTF-8 text file")
    mask.add_argument("-o", "--output", help="Masked output (default: output/<stem>.masked.txt)")
    mask.add_argument("--items", help=f"Items file (default: <output>{ITEMS_SUFFIX})")
    mask.add_argument("--log", help="Audit log file (types and positions only)")
    _add_key_arguments(mask)
    mask.set_defaults(handler=cmd_mask)

    unmask = subparsers.add_parser("unmask", help="Restore a masked text file")
    unmask.add_argument("input_file", help="Masked text file")
    unmask.add_argument("-o", "--output", help="Restored output (default: stdout)")
    unmask.add_argument("--items", help=f"Items file (default: <input>{ITEMS_SUFFIX})")
    _add_key_arguments(unmask)
    unmask.set_defaults(handler=cmd_unmask)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
        configure_logging(args.log_level or get_logging_config(config)["level"])
        return args.handler(args, config)
    except (AnonymizationError, KeyError, OSError, ValueError) as e:
        message = e.args[0] if isinstance(e, KeyError) and e.args else e
        print(f"Error: {message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
