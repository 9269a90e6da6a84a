from __future__ import annotations

from pathlib import Path

import pytest

from omniauthor_api.common.config import GenerationParams, Settings, load_settings


def test_defaults() -> None:
    settings = load_settings(environ={})
    assert settings == Settings()
    assert settings.port == 8080
    assert settings.project is None
    assert settings.location == "us-central1"
    assert settings.model_id == "gemini-1.5-pro-002"
    assert settings.generation == GenerationParams(2048, 1.0, 0.95)


def test_environment_values() -> None:
    settings = load_settings(
        environ={
            "PORT": "9000",
            "GOOGLE_CLOUD_PROJECT": "proj",
            "GEMINI_LOCATION": "asia-northeast1",
            "TEMPERATURE": "0.5",
            "LOG_LEVEL": "debug",
        }
    )
    assert settings.port == 9000
    assert settings.project == "proj"
    assert settings.location == "asia-northeast1"
    assert settings.generation.temperature == 0.5
    assert settings.log_level == "DEBUG"


def test_yaml_then_environment_precedence(tmp_path: Path) -> None:
    cfg = tmp_path / "omniauthor.yaml"
    cfg.write_text("port: 7000\nproject: from-file\ntop_p: 0.5\nunknown: ignored\n", encoding="utf-8")
    settings = load_settings(environ={"OMNIAUTHOR_CONFIG": str(cfg), "PORT": "7100"})
    assert settings.port == 7100
    assert settings.project == "from-file"
    assert settings.generation.top_p == 0.5


def test_invalid_number_raises() -> None:
    with pytest.raises(ValueError):
        load_settings(environ={"PORT": "eighty"})


def test_missing_config_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_settings(environ={}, config_path=str(tmp_path / "missing.yaml"))


def test_settings_are_immutable() -> None:
    settings = Settings()
    with pytest.raises(AttributeError):
        settings.port = 1  # type: ignore[misc]


@pytest.mark.parametrize("text", ["max_output_tokens: 1.5\n", "port: 80.5\n", "port: true\n"])
def test_non_integer_yaml_values_rejected(tmp_path: Path, text: str) -> None:
    cfg = tmp_path / "omniauthor.yaml"
    cfg.write_text(text, encoding="utf-8")
    with pytest.raises(ValueError):
        load_settings(environ={}, config_path=str(cfg))


def test_integral_yaml_float_accepted(tmp_path: Path) -> None:
    cfg = tmp_path / "omniauthor.yaml"
    cfg.write_text("max_output_tokens: 1024.0\n", encoding="utf-8")
    assert load_settings(environ={}, config_path=str(cfg)).generation.max_output_tokens == 1024


@pytest.mark.parametrize(
    "value, expected",
    [("warn", "WARNING"), ("Fatal", "CRITICAL"), ("debug", "DEBUG")],
)
def test_log_level_aliases_normalised(value: str, expected: str) -> None:
    assert load_settings(environ={"LOG_LEVEL": value}).log_level == expected


def test_unknown_log_level_rejected() -> None:
    with pytest.raises(ValueError):
        load_settings(environ={"LOG_LEVEL": "verbose"})
