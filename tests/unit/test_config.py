"""Unit tests for the configuration loader."""

from config import (
    DEFAULT_ANONYMIZER_PROFILES,
    get_anonymizer_profiles,
    get_cipher_config,
    get_keystore_config,
    get_logging_config,
    get_recognizer_entities,
    load_config,
)


class TestLoadConfig:
    """load_config."""

    def test_project_config(self):
        """The bundled config.yaml loads with every section."""
        config = load_config()
        for section in ("cipher", "anonymizers", "recognizers", "keystore", "logging"):
            assert section in config

    def test_missing_file(self, tmp_path):
        """A missing file gives an empty config."""
        assert load_config(str(tmp_path / "absent.yaml")) == {}

    def test_empty_file(self, tmp_path):
        """An empty file gives an empty config."""
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(str(path)) == {}

    def test_custom_file(self, tmp_path):
        """Values come from the given file."""
        path = tmp_path / "config.yaml"
        path.write_text("cipher:\n  radix: 16\n", encoding="utf-8")
        assert get_cipher_config(load_config(str(path)))["radix"] == 16


class TestSectionGetters:
    """Section accessors and their defaults."""

    def test_cipher_defaults(self):
        """Radix 10, default tweak and alphabet."""
        assert get_cipher_config({}) == {"radix": 10, "tweak": None, "alphabet": None}

    def test_cipher_alphabet_name(self):
        """Alphabet names in the config are resolved to their symbols."""
        assert get_cipher_config({"cipher": {"alphabet": "hex"}})["alphabet"] == "0123456789abcdef"

    def test_anonymizer_profiles_default(self):
        """Without a section the default profiles are used."""
        profiles = get_anonymizer_profiles({})
        assert set(profiles) == set(DEFAULT_ANONYMIZER_PROFILES)
        assert profiles["PHONE_NUMBER"]["kind"] == "phone"

    def test_anonymizer_profiles_normalized(self):
        """Missing kind means string; missing options mean none."""
        profiles = get_anonymizer_profiles({"anonymizers": {"PERSON": None, "ID": {"kind": "generic"}}})
        assert profiles["PERSON"] == {"kind": "string", "options": {}}
        assert profiles["ID"] == {"kind": "generic", "options": {}}

    def test_profiles_copy_options(self, sample_config):
        """Returned options can be changed without touching the config."""
        profiles = get_anonymizer_profiles(sample_config)
        profiles["EMAIL_ADDRESS"]["options"]["preserve_domain"] = False
        assert sample_config["anonymizers"]["EMAIL_ADDRESS"]["options"]["preserve_domain"] is True

    def test_recognizer_entities(self, sample_config):
        """Entities come from recognizers.entities."""
        assert get_recognizer_entities(sample_config) == ["EMAIL_ADDRESS", "PHONE_NUMBER", "CREDIT_CARD"]
        assert get_recognizer_entities({}) == list(DEFAULT_ANONYMIZER_PROFILES)

    def test_keystore(self, sample_config):
        """Key store path and iterations."""
        assert get_keystore_config(sample_config) == {"path": "keystore.dat", "iterations": 1000}
        assert get_keystore_config({})["iterations"] == 10000

    def test_logging(self):
        """WARNING and no audit file by default."""
        assert get_logging_config({}) == {"level": "WARNING", "audit_log": None}
