"""
Настройки: значения по умолчанию, JSON-файл, переменная окружения
"""
import json

import pytest

from fits_viewer.config import CONFIG_ENV_VAR, DEFAULT_SETTINGS, ViewerSettings, load_settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        settings = load_settings()

        assert settings is DEFAULT_SETTINGS
        assert settings.stretch == "linear"
        assert settings.value_typing == "legacy"
        assert settings.exclude_zero_pixels is True
        assert settings.clamp_output is True

    def test_file_overrides(self, tmp_path):
        path = tmp_path / "viewer.json"
        path.write_text(json.dumps({"stretch": "sqrt", "strict_bounds": True}), encoding="utf-8")
        settings = load_settings(path)

        assert settings.stretch == "sqrt"
        assert settings.strict_bounds is True
        assert settings.contrast == DEFAULT_SETTINGS.contrast

    def test_env_var(self, tmp_path, monkeypatch):
        path = tmp_path / "viewer.json"
        path.write_text(json.dumps({"value_typing": "strict"}), encoding="utf-8")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

        assert load_settings().value_typing == "strict"

    def test_unknown_key_is_ignored(self, tmp_path, caplog):
        path = tmp_path / "viewer.json"
        path.write_text(json.dumps({"zoom": 3}), encoding="utf-8")

        assert load_settings(path) == DEFAULT_SETTINGS
        assert "zoom" in caplog.text

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "viewer.json"
        path.write_text(json.dumps({"stretch": "log"}), encoding="utf-8")
        with pytest.raises(ValueError):
            load_settings(path)

    def test_not_json(self, tmp_path):
        path = tmp_path / "viewer.json"
        path.write_text("stretch = sqrt", encoding="utf-8")
        with pytest.raises(ValueError):
            load_settings(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "nope.json")

    @pytest.mark.parametrize("overrides", [
        {"max_header_cards": "10"},
        {"max_header_cards": 10.5},
        {"max_header_cards": True},
        {"contrast": "0.5"},
        {"contrast": False},
        {"exclude_zero_pixels": "false"},
        {"clamp_output": 0},
        {"strict_bounds": None},
        {"log_level": 10},
    ])
    def test_wrong_value_types(self, tmp_path, overrides):
        path = tmp_path / "viewer.json"
        path.write_text(json.dumps(overrides), encoding="utf-8")
        with pytest.raises(ValueError):
            load_settings(path)

    def test_numeric_values_accepted(self, tmp_path):
        path = tmp_path / "viewer.json"
        path.write_text(
            json.dumps({"contrast": 1, "max_header_cards": 36, "exclude_zero_pixels": False}),
            encoding="utf-8",
        )
        settings = load_settings(path)

        assert settings.contrast == 1
        assert settings.max_header_cards == 36
        assert settings.exclude_zero_pixels is False

    def test_contrast_range(self):
        with pytest.raises(ValueError):
            ViewerSettings(contrast=1.5)
