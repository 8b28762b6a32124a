"""Tests for the HTTP and WebSocket API."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from conftest import SUMMARY_REPLY, FakeTranscoder, transcript_segments
from edu_echo.app import create_app
from edu_echo.config import PipelineConfig
from edu_echo.dependencies import Services
from edu_echo.domain.duration_prober import DurationProber
from edu_echo.domain.flashcard_generator import FlashcardGenerator
from edu_echo.domain.quiz_generator import QuizGenerator
from edu_echo.domain.summarizer import SummarizationEngine
from edu_echo.domain.transcription_orchestrator import TranscriptionOrchestrator
from edu_echo.handlers import AudioPipeline
from edu_echo.handlers.audio_pipeline import UPLOAD_SUCCEEDED
from edu_echo.infrastructure import ObserverRegistry

AUDIO_FILE = {"audio": ("lecture.webm", b"webm-bytes", "audio/webm")}

QUESTION_REPLY = "Question: What is 2 + 2?\nA. 3\nB. 4\nC. 5\nD. 22\nAnswer: B"


@pytest.fixture
def registry():
    return ObserverRegistry()


@pytest.fixture
def client(
    storage,
    wav_data,
    transcription_service,
    generator,
    audio_repository,
    user_repository,
    summary_repository,
    registry,
):
    pipeline = AudioPipeline(
        storage=storage,
        transcoder=FakeTranscoder(wav_data),
        prober=DurationProber(),
        orchestrator=TranscriptionOrchestrator(
            transcription_service, poll_interval_seconds=0
        ),
        summarizer=SummarizationEngine(generator),
        audio_repository=audio_repository,
        user_repository=user_repository,
        summary_repository=summary_repository,
        notifier=registry,
        config=PipelineConfig(max_upload_bytes=1024, existence_delay_seconds=0),
    )
    services = Services(
        pipeline=pipeline,
        storage=storage,
        quiz_generator=QuizGenerator(generator),
        flashcard_generator=FlashcardGenerator(generator),
        audio_repository=audio_repository,
        user_repository=user_repository,
        summary_repository=summary_repository,
        notifier=registry,
    )
    with TestClient(create_app(services)) as test_client:
        yield test_client


def _upload(client) -> str:
    response = client.post("/audio/upload", files=AUDIO_FILE)
    assert response.status_code == 200
    return response.json()["audioID"]


class TestAudioRoutes:
    def test_upload_returns_audio_id(self, client, storage):
        audio_id = _upload(client)
        assert len(audio_id) == 32
        assert f"audio-{audio_id}.wav" in storage.objects

    def test_upload_without_file(self, client):
        response = client.post("/audio/upload")
        assert response.status_code == 400
        assert response.json() == {"error": "Audio file is required"}

    def test_upload_empty_file(self, client):
        response = client.post(
            "/audio/upload", files={"audio": ("empty.webm", b"", "audio/webm")}
        )
        assert response.status_code == 400

    def test_upload_too_large(self, client):
        response = client.post(
            "/audio/upload", files={"audio": ("big.webm", b"x" * 2048, "audio/webm")}
        )
        assert response.status_code == 413
        assert "limit is 1024 bytes" in response.json()["error"]

    def test_unexpected_upload_error_is_logged(self, client, monkeypatch, caplog):
        async def broken_upload(data, file_name):
            raise RuntimeError("disk full")

        monkeypatch.setattr(client.app.state.services.pipeline, "upload", broken_upload)

        response = client.post("/audio/upload", files=AUDIO_FILE)

        assert response.status_code == 500
        assert response.json() == {"error": "Error processing audio"}
        record = next(
            r for r in caplog.records if r.getMessage() == "Error uploading audio"
        )
        assert record.exc_info[0] is RuntimeError
        assert record.file_name == "lecture.webm"

    def test_unexpected_transcribe_error_is_logged(self, client, monkeypatch, caplog):
        async def broken_transcribe(audio_id, user_id):
            raise RuntimeError("connection reset")

        monkeypatch.setattr(
            client.app.state.services.pipeline, "transcribe", broken_transcribe
        )

        response = client.post(
            "/audio/transcribe", json={"audioID": "abc", "userId": str(uuid4())}
        )

        assert response.status_code == 500
        record = next(
            r for r in caplog.records if r.getMessage() == "Error transcribing audio"
        )
        assert record.exc_info[0] is RuntimeError
        assert record.audio_id == "abc"

    def test_transcribe_returns_summary(
        self, client, transcription_service, generator, user_id
    ):
        transcription_service.segments = transcript_segments("A short lecture.")
        generator.replies = [SUMMARY_REPLY.format(topic="Waves")]
        audio_id = _upload(client)

        response = client.post(
            "/audio/transcribe", json={"audioID": audio_id, "userId": str(user_id)}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Transcription and summarization successful"
        assert body["summary"].startswith("Waves\n\n")

    def test_transcribe_unknown_user(self, client):
        response = client.post(
            "/audio/transcribe", json={"audioID": "abc", "userId": str(uuid4())}
        )
        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}

    def test_transcribe_empty_transcript(self, client, user_id):
        audio_id = _upload(client)

        response = client.post(
            "/audio/transcribe", json={"audioID": audio_id, "userId": str(user_id)}
        )

        assert response.status_code == 500
        assert response.json()["error"] == (
            "Transcription is empty or not understandable. No summary generated."
        )

    def test_transcribe_invalid_body(self, client):
        response = client.post("/audio/transcribe", json={"audioID": "abc"})
        assert response.status_code == 422
        assert "userId" in response.json()["error"]

    def test_get_and_delete_audio(self, client, storage):
        audio_id = _upload(client)

        response = client.get(f"/audio/{audio_id}")
        assert response.status_code == 200
        assert response.json()["storageUri"].endswith(f"audio-{audio_id}.wav")

        response = client.delete(f"/audio/{audio_id}")
        assert response.status_code == 200
        assert storage.objects == {}
        assert client.get(f"/audio/{audio_id}").status_code == 404

    def test_delete_unknown_audio(self, client):
        response = client.delete("/audio/unknown")
        assert response.status_code == 404
        assert response.json() == {"error": "Audio not found"}


class TestSummaryRoutes:
    def test_generate_summary(self, client, generator):
        generator.replies = [SUMMARY_REPLY.format(topic="Gravity")]

        response = client.post(
            "/summaries/generate",
            json={"transcription": "Objects fall.", "audioDuration": 60},
        )

        assert response.status_code == 200
        assert response.json()["summary"].startswith("Gravity")

    def test_generate_summary_from_empty_transcript(self, client):
        response = client.post("/summaries/generate", json={"transcription": " "})
        assert response.status_code == 400

    def test_generate_summary_backend_failure(self, client, generator):
        generator.replies = [""]
        response = client.post(
            "/summaries/generate", json={"transcription": "Objects fall."}
        )
        assert response.status_code == 500
        assert "error" in response.json()

    def test_summary_crud(self, client, user_id):
        headers = {"X-User-Id": str(user_id)}

        response = client.post(
            "/summaries", json={"topic": "Draft", "points": ["a"]}, headers=headers
        )
        assert response.status_code == 201
        saved = response.json()["savedSummary"]
        assert saved["userId"] == str(user_id)
        summary_id = saved["id"]

        listed = client.get("/summaries", headers=headers).json()["summaries"]
        assert [s["topic"] for s in listed] == ["Draft"]

        response = client.put(
            f"/summaries/{summary_id}",
            json={"topic": "Final", "points": ["b"]},
            headers=headers,
        )
        assert response.status_code == 200
        assert response.json()["summary"]["topic"] == "Final"
        assert client.get(f"/summaries/{summary_id}").json()["points"] == ["b"]

        response = client.delete(f"/summaries/{summary_id}", headers=headers)
        assert response.status_code == 200
        assert client.get(f"/summaries/{summary_id}").status_code == 404

    def test_other_users_cannot_modify(self, client, user_id):
        response = client.post(
            "/summaries",
            json={"topic": "Mine", "points": []},
            headers={"X-User-Id": str(user_id)},
        )
        summary_id = response.json()["savedSummary"]["id"]
        intruder = {"X-User-Id": str(uuid4())}

        response = client.put(
            f"/summaries/{summary_id}",
            json={"topic": "Theirs", "points": []},
            headers=intruder,
        )
        assert response.status_code == 404
        response = client.delete(f"/summaries/{summary_id}", headers=intruder)
        assert response.status_code == 404

    def test_missing_user_header(self, client):
        response = client.get("/summaries")
        assert response.status_code == 401
        assert response.json() == {"error": "Authentication required"}

    def test_saved_summaries_after_transcription(
        self, client, transcription_service, generator, user_id
    ):
        transcription_service.segments = transcript_segments("A short lecture.")
        generator.replies = [SUMMARY_REPLY.format(topic="Waves")]
        audio_id = _upload(client)
        client.post(
            "/audio/transcribe", json={"audioID": audio_id, "userId": str(user_id)}
        )

        response = client.get("/summaries/saved", headers={"X-User-Id": str(user_id)})

        assert response.status_code == 200
        (snapshot,) = response.json()["savedSummaries"]
        assert snapshot["topic"] == "Waves"

    def test_saved_summaries_of_unknown_user(self, client):
        response = client.get("/summaries/saved", headers={"X-User-Id": str(uuid4())})
        assert response.status_code == 404


class TestQuizRoutes:
    def test_generate_quiz(self, client, generator):
        generator.replies = [QUESTION_REPLY] * 2
        content = "Arithmetic is the study of numbers. " * 5

        response = client.post(
            "/quizzes/generate", json={"content": content, "questionCount": 2}
        )

        assert response.status_code == 200
        questions = response.json()["questions"]
        assert len(questions) == 2
        assert questions[0]["correctAnswer"] == "4"

    def test_short_content(self, client):
        response = client.post("/quizzes/generate", json={"content": "Too short."})
        assert response.status_code == 400
        assert response.json() == {"error": "Content is not detailed enough."}


class TestFlashcardRoutes:
    def test_generate_flashcards(self, client, generator):
        generator.replies = ["Term: Atom\nDefinition: Smallest unit of an element."]

        response = client.post(
            "/flashcards/generate",
            json={"materialText": "Atoms are the smallest units of elements."},
        )

        assert response.status_code == 200
        assert response.json() == {
            "flashcards": [
                {"term": "Atom", "definition": "Smallest unit of an element."}
            ]
        }

    @pytest.mark.parametrize("body", [{}, {"materialText": "   "}])
    def test_missing_material(self, client, generator, body):
        response = client.post("/flashcards/generate", json=body)
        assert response.status_code == 400
        assert response.json() == {
            "error": "No text was provided for flashcard generation."
        }
        assert generator.prompts == []

    def test_no_flashcards_generated(self, client, generator):
        generator.replies = ["I could not find any key concepts."]

        response = client.post(
            "/flashcards/generate", json={"materialText": "Some lecture notes."}
        )

        assert response.status_code == 500
        assert "Could not parse flashcards" in response.json()["error"]


class TestNotifications:
    def test_observer_receives_upload_notification(self, client):
        with client.websocket_connect("/ws") as websocket:
            _upload(client)
            assert websocket.receive_text() == UPLOAD_SUCCEEDED

    def test_disconnected_observer_receives_nothing(self, client, registry):
        with client.websocket_connect("/ws"):
            assert registry.observer_count == 1

        _upload(client)

        assert registry.observer_count == 0
