from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from smartsummary.config import MailConfig, Settings
from smartsummary.providers import SummarizationEngine, TranscriptionEngine
from smartsummary.utils.subprocess import ProcessRunner

_API_ROOT = Path(__file__).resolve().parents[1]
if str(_API_ROOT) not in sys.path:
    sys.path.insert(0, str(_API_ROOT))

from api_fakes import (  # noqa: E402
    SUMMARIZE_ECHO,
    TRANSCRIBE_OK,
    FakeNoteRepository,
    InMemoryPool,
    RecordingNotifier,
    python_engine,
)


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        upload_dir=str(tmp_path / "uploads"),
        log_dir=str(tmp_path / "logs"),
        mail=MailConfig(enabled=True, recipient="team@example.com"),
    )


@pytest.fixture()
def db_pool() -> InMemoryPool:
    return InMemoryPool()


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def runner() -> ProcessRunner:
    return ProcessRunner(timeout_s=30)


@pytest.fixture()
def engines(runner: ProcessRunner) -> tuple[TranscriptionEngine, SummarizationEngine]:
    return (
        TranscriptionEngine(runner, python_engine(TRANSCRIBE_OK)),
        SummarizationEngine(runner, python_engine(SUMMARIZE_ECHO)),
    )


@pytest.fixture(autouse=True)
def patch_repos(monkeypatch) -> None:
    monkeypatch.setattr("services.note_service.NoteRepository", FakeNoteRepository)


@pytest.fixture()
def app(settings: Settings, db_pool: InMemoryPool, notifier, engines) -> FastAPI:  # noqa: ANN001
    from errors import install_error_handlers
    from routes.health import router as health_router
    from routes.notes import router as notes_router
    from routes.summaries import router as summaries_router
    from routes.uploads import router as uploads_router

    test_app = FastAPI()
    test_app.state.settings = settings
    test_app.state.db_pool = db_pool
    test_app.state.notifier = notifier
    test_app.state.engines = engines
    install_error_handlers(test_app)
    test_app.include_router(uploads_router)
    test_app.include_router(summaries_router)
    test_app.include_router(notes_router)
    test_app.include_router(health_router)
    return test_app


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
