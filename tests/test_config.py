"""Tests for TOML configuration loading."""

from __future__ import annotations

import pytest

from shared.config import PassWardenConfig


class TestConfigLoad:
    def test_defaults(self):
        config = PassWardenConfig()
        assert config.generator.reliable_length == 20
        assert config.generator.required_score == 5
        assert config.estimator.default_algorithm == "SHA1"
        assert set(config.crack_speeds) == {"MD5", "SHA1", "SHA2_224", "SHA3_224", "BCRYPT", "SCRYPT"}

    def test_sections_override(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(
            "[global]\n"
            'log_level = "DEBUG"\n'
            "[breach]\n"
            'api_url = "https://mirror.test"\n'
            "add_padding = false\n"
            "[generator]\n"
            "max_attempts = 50\n"
            "unknown_key = 1\n",
            encoding="utf-8",
        )
        config = PassWardenConfig.load(path)
        assert config.global_settings.log_level == "DEBUG"
        assert config.breach.api_url == "https://mirror.test"
        assert config.breach.add_padding is False
        assert config.generator.max_attempts == 50
        assert config.generator.reliable_length == 20

    def test_speed_table_replaces_defaults(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[crack_speeds]\nsha1 = 1000\n", encoding="utf-8")
        config = PassWardenConfig.load(path)
        assert config.crack_speeds == {"SHA1": 1000.0}

    def test_missing_explicit_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            PassWardenConfig.load(tmp_path / "absent.toml")

    def test_to_dict(self):
        data = PassWardenConfig().to_dict()
        assert data["breach"]["api_url"] == "https://api.pwnedpasswords.com"


    @pytest.mark.parametrize(
        "section",
        [
            "reliable_length = 12\n",
            "required_score = 0\n",
            "required_score = 6\n",
            "max_attempts = -1\n",
        ],
    )
    def test_generator_section_rejects_unreachable_settings(self, tmp_path, section):
        path = tmp_path / "config.toml"
        path.write_text("[generator]\n" + section, encoding="utf-8")
        with pytest.raises(ValueError):
            PassWardenConfig.load(path)
