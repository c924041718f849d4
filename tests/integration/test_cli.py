"""Integration tests for the command-line interface."""

import json

import pytest

from fpe import BASE64, ConfigurationError
from main import ITEMS_SUFFIX, PASSWORD_ENV, main, parse_options
from tests.conftest import KEY_HEX

TWEAK_HEX = "00000000000000"


def run(capsys, *argv):
    code = main(list(argv))
    captured = capsys.readouterr()
    return code, captured.out.strip(), captured.err


class TestParseOptions:
    """--option NAME=VALUE parsing."""

    def test_pairs(self):
        """Pairs become a dict; values keep any '='."""
        assert parse_options(["preserve_domain=false", "preserve_pattern=a=(b)"]) == {
            "preserve_domain": "false",
            "preserve_pattern": "a=(b)",
        }

    def test_missing_value(self):
        """A bare name is rejected."""
        with pytest.raises(ConfigurationError):
            parse_options(["preserve_domain"])


class TestTransformCommands:
    """anonymize / deanonymize."""

    def test_phone_round_trip(self, capsys):
        """A phone number anonymized on the CLI comes back with deanonymize."""
        code, token, _ = run(capsys, "anonymize", "--kind", "phone", "--key", KEY_HEX, "+40 721 234 567")
        assert code == 0
        assert token.startswith("+40 ")

        code, original, _ = run(capsys, "deanonymize", "--kind", "phone", "--key", KEY_HEX, token)
        assert code == 0
        assert original == "+40 721 234 567"

    def test_options(self, capsys):
        """--option values reach the anonymizer."""
        code, token, _ = run(
            capsys, "anonymize", "--kind", "numeric", "--key", KEY_HEX, "--tweak", TWEAK_HEX,
            "--option", "preserve_decimal_places=2", "-123.4567",
        )
        assert code == 0
        assert token.startswith("-") and token[4:7] == ".45"

    def test_named_alphabet(self, capsys):
        """--alphabet accepts a name; generic values stay in that alphabet."""
        code, token, _ = run(
            capsys, "anonymize", "--kind", "generic", "--key", KEY_HEX, "--alphabet", "base64", "aGVsbG8gd29ybGQ=",
        )
        assert code == 0
        assert len(token) == len("aGVsbG8gd29ybGQ=")
        assert all(c in BASE64 for c in token)

        code, original, _ = run(
            capsys, "deanonymize", "--kind", "generic", "--key", KEY_HEX, "--alphabet", "base64", token,
        )
        assert original == "aGVsbG8gd29ybGQ="

    def test_unknown_option(self, capsys):
        """Unknown options are reported as errors."""
        code, _, err = run(capsys, "anonymize", "--kind", "email", "--key", KEY_HEX, "--option", "bogus=1", "a@b.c")
        assert code == 1
        assert "Unknown option" in err

    def test_missing_key(self, capsys):
        """Without key material the command fails cleanly."""
        code, _, err = run(capsys, "anonymize", "--kind", "string", "hello")
        assert code == 1
        assert err.startswith("Error:")

    def test_bad_key(self, capsys):
        """Invalid keys are reported, not raised."""
        code, _, err = run(capsys, "anonymize", "--kind", "string", "--key", "abc", "hello")
        assert code == 1
        assert "Key" in err


class TestKeyCommands:
    """generate-key / derive-key and key store use."""

    def test_generate_key(self, capsys):
        """A random key and tweak are printed."""
        code, out, _ = run(capsys, "generate-key")
        assert code == 0
        lines = dict(line.split(":", 1) for line in out.splitlines())
        assert len(bytes.fromhex(lines["key"].strip())) == 32
        assert len(bytes.fromhex(lines["tweak"].strip())) == 7

    def test_tweak_only(self, capsys):
        """--tweak-only prints a single tweak."""
        code, out, _ = run(capsys, "generate-key", "--tweak-only")
        assert code == 0
        assert len(bytes.fromhex(out)) == 7

    def test_derive_key_is_deterministic(self, capsys):
        """Derivation repeats for the same inputs."""
        _, first, _ = run(capsys, "derive-key", "--master", KEY_HEX, "--identifier", "customer-42")
        _, second, _ = run(capsys, "derive-key", "--master", KEY_HEX, "--identifier", "customer-42")
        assert first == second

    def test_keystore_round_trip(self, capsys, tmp_path, monkeypatch):
        """A key saved to a store can be used by name."""
        store = str(tmp_path / "keys.dat")
        monkeypatch.setenv(PASSWORD_ENV, "secret")

        code, _, err = run(capsys, "generate-key", "--name", "customers", "--keystore", store)
        assert code == 0
        assert "Saved key 'customers'" in err

        code, token, _ = run(
            capsys, "anonymize", "--kind", "email", "--keystore", store, "--key-name", "customers",
            "john.doe@example.com",
        )
        assert code == 0
        code, original, _ = run(
            capsys, "deanonymize", "--kind", "email", "--keystore", store, "--key-name", "customers", token,
        )
        assert original == "john.doe@example.com"

    def test_keystore_wrong_password(self, capsys, tmp_path):
        """A wrong password is an error, not a traceback."""
        store = str(tmp_path / "keys.dat")
        run(capsys, "generate-key", "--name", "n", "--keystore", store, "--password", "secret")
        code, _, err = run(
            capsys, "anonymize", "--kind", "string", "--keystore", store, "--key-name", "n",
            "--password", "wrong", "hello",
        )
        assert code == 1
        assert err.startswith("Error:")

    def test_unknown_key_name(self, capsys, tmp_path):
        """Unknown names are reported."""
        store = str(tmp_path / "keys.dat")
        run(capsys, "generate-key", "--name", "n", "--keystore", store, "--password", "secret")
        code, _, err = run(
            capsys, "anonymize", "--kind", "string", "--keystore", store, "--key-name", "other",
            "--password", "secret", "hello",
        )
        assert code == 1
        assert "other" in err


class TestFileCommands:
    """mask / unmask."""

    def test_mask_and_unmask(self, capsys, tmp_path):
        """A masked file and its items restore the original file."""
        source = tmp_path / "notes.txt"
        text = "Contact john.doe@example.com or +40 721 234 567.\n"
        source.write_text(text, encoding="utf-8")
        masked = tmp_path / "out" / "notes.masked.txt"
        restored = tmp_path / "restored.txt"
        audit = tmp_path / "audit.log"

        code, _, err = run(capsys, "mask", str(source), "--key", KEY_HEX, "-o", str(masked), "--log", str(audit))
        assert code == 0
        assert "Masked 2 entities" in err

        masked_text = masked.read_text(encoding="utf-8")
        assert "john.doe@example.com" not in masked_text
        items = json.loads((tmp_path / "out" / ("notes.masked.txt" + ITEMS_SUFFIX)).read_text(encoding="utf-8"))
        assert {item["entity_type"] for item in items} == {"EMAIL_ADDRESS", "PHONE_NUMBER"}

        audit_text = audit.read_text(encoding="utf-8")
        assert "[EMAIL_ADDRESS]" in audit_text
        assert "john.doe@example.com" not in audit_text

        code, _, _ = run(capsys, "unmask", str(masked), "--key", KEY_HEX, "-o", str(restored))
        assert code == 0
        assert restored.read_text(encoding="utf-8") == text

    def test_unmask_to_stdout(self, capsys, tmp_path):
        """Without -o the restored text goes to stdout."""
        source = tmp_path / "card.txt"
        source.write_text("Card 4111 1111 1111 1111", encoding="utf-8")
        masked = tmp_path / "card.masked.txt"

        run(capsys, "mask", str(source), "--key", KEY_HEX, "-o", str(masked))
        code, out, _ = run(capsys, "unmask", str(masked), "--key", KEY_HEX)
        assert code == 0
        assert out == "Card 4111 1111 1111 1111"

    def test_missing_input(self, capsys, tmp_path):
        """Missing files are reported."""
        code, _, err = run(capsys, "mask", str(tmp_path / "absent.txt"), "--key", KEY_HEX)
        assert code == 1
        assert "not found" in err
