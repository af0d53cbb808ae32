from __future__ import annotations

from fastapi.testclient import TestClient

from api_fakes import ENGINE_CRASH, TRANSCRIBE_OK, BrokenTransportNotifier, RecordingNotifier, python_engine
from smartsummary.config import MailConfig
from smartsummary.providers import SummarizationEngine, TranscriptionEngine


def test_summarize_applies_defaults_and_persists_note(client, db_pool, notifier) -> None:
    res = client.post("/summarize", json={"text": "long meeting text"})
    assert res.status_code == 200
    assert res.json() == {
        "success": True,
        "summary": "long meeting text",
        "message": "Summary generated and saved successfully",
    }

    (note,) = db_pool.notes.values()
    assert note.title == "Untitled Meeting"
    assert note.email == "anonymous@example.com"
    assert note.duration == "N/A"
    assert note.content == "long meeting text"
    assert note.summary == note.markdown == "long meeting text"
    assert 80 <= note.score <= 100
    assert notifier.hints == ["anonymous@example.com"]


def test_summarize_keeps_supplied_metadata(client, db_pool) -> None:
    res = client.post(
        "/summarize",
        json={
            "text": "standup",
            "title": "Daily standup",
            "email": "pm@example.com",
            "duration": "12:30",
        },
    )
    assert res.status_code == 200
    (note,) = db_pool.notes.values()
    assert (note.title, note.email, note.duration) == ("Daily standup", "pm@example.com", "12:30")


def test_summarize_requires_text(client, db_pool, notifier) -> None:
    for body in ({}, {"text": ""}, {"text": "   ", "title": "t"}):
        res = client.post("/summarize", json=body)
        assert res.status_code == 400
        assert res.json() == {"error": "No text provided"}
    assert db_pool.notes == {}
    assert notifier.hints == []


def test_summarize_engine_failure_creates_no_note(client, app, runner, db_pool, notifier) -> None:
    app.state.engines = (
        TranscriptionEngine(runner, python_engine(TRANSCRIBE_OK)),
        SummarizationEngine(runner, python_engine(ENGINE_CRASH)),
    )
    res = client.post("/summarize", json={"text": "long meeting text"})
    assert res.status_code == 500
    assert res.json() == {"error": "Error processing summary", "details": "model crashed"}
    assert db_pool.notes == {}
    assert notifier.hints == []


def test_summarize_storage_failure(client, db_pool, notifier) -> None:
    db_pool.fail = True
    res = client.post("/summarize", json={"text": "long meeting text"})
    assert res.status_code == 500
    assert res.json() == {
        "error": "Failed to save summary to database",
        "details": "connection refused",
    }
    assert notifier.hints == []


def test_summarize_succeeds_when_notifier_raises(app, db_pool) -> None:
    app.state.notifier = RecordingNotifier(fail=True)
    res = TestClient(app).post("/summarize", json={"text": "long meeting text"})
    assert res.status_code == 200
    assert res.json()["success"] is True
    assert len(db_pool.notes) == 1


def test_summarize_succeeds_when_mail_transport_throws(app, db_pool) -> None:
    notifier = BrokenTransportNotifier(MailConfig(enabled=True, recipient="team@example.com"))
    app.state.notifier = notifier
    with TestClient(app) as client:
        res = client.post("/summarize", json={"text": "long meeting text"})
        client.portal.call(notifier.drain)
    assert res.status_code == 200
    assert res.json()["success"] is True
    assert notifier.pending == 0
    assert len(db_pool.notes) == 1


def test_summarize_rejects_malformed_body(client) -> None:
    res = client.post(
        "/summarize", content=b"not json", headers={"content-type": "application/json"}
    )
    assert res.status_code == 400
    assert res.json()["error"] == "Invalid request"
