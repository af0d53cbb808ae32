from pathlib import Path

import pytest

from smartsummary.config import EngineConfig, Settings
from smartsummary.exceptions import ConfigurationError


def test_upload_dir_is_created_on_construction(tmp_path) -> None:
    target = tmp_path / "nested" / "uploads"
    settings = Settings(upload_dir=str(target), log_dir=str(tmp_path / "logs"))
    assert Path(settings.upload_dir).is_dir()


def test_allowed_types_from_env(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("ALLOWED_AUDIO_TYPES", "audio/wav, Audio/FLAC")
    settings = Settings(upload_dir=str(tmp_path / "u"), log_dir=str(tmp_path / "l"))
    assert settings.allowed_audio_types == ["audio/wav", "audio/flac"]


def test_engine_timeout_zero_disables_limit() -> None:
    assert EngineConfig(timeout_s=0).effective_timeout_s is None
    assert EngineConfig(timeout_s=12).effective_timeout_s == 12.0


def test_engine_commands_must_not_be_blank() -> None:
    with pytest.raises(ConfigurationError):
        EngineConfig(transcribe_command="  ")


def test_database_url(tmp_path) -> None:
    settings = Settings(
        upload_dir=str(tmp_path / "u"),
        log_dir=str(tmp_path / "l"),
        postgres_user="u",
        postgres_password="p",
        postgres_host="db",
        postgres_port=6543,
        postgres_db="notes",
    )
    assert settings.database_url == "postgresql://u:p@db:6543/notes"
