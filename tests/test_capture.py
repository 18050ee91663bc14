"""Tests for the capture transition table and the photobooth page config."""

from portfolio_site.domain.capture import TRANSITIONS, CaptureState
from portfolio_site.services.capture import (
    MIME_PREFERENCES,
    PHOTO_MAX_WIDTH,
    capture_config,
)


def test_error_and_teardown_reachable_from_every_state() -> None:
    for state in CaptureState:
        assert CaptureState.ERROR in TRANSITIONS[state]
        assert CaptureState.IDLE in TRANSITIONS[state]


def test_upload_requires_a_taken_photo() -> None:
    assert CaptureState.UPLOADING in TRANSITIONS[CaptureState.PHOTO_TAKEN]
    assert CaptureState.UPLOADING not in TRANSITIONS[CaptureState.CAMERA_READY]
    assert CaptureState.PHOTO_TAKEN in TRANSITIONS[CaptureState.UPLOADING]


def test_error_only_recovers_through_camera_restart() -> None:
    assert CaptureState.CAMERA_READY not in TRANSITIONS[CaptureState.ERROR]
    assert CaptureState.CAMERA_STARTING in TRANSITIONS[CaptureState.ERROR]


def test_capture_config_mirrors_transition_table() -> None:
    config = capture_config()

    assert config["states"] == {state.name: state.value for state in CaptureState}
    assert set(config["transitions"]) == {state.value for state in CaptureState}
    assert "uploading" in config["transitions"]["photo-taken"]
    assert "uploading" not in config["transitions"]["camera-ready"]
    assert config["transitions"]["done"] == ["error", "idle"]


def test_capture_config_recording_policy() -> None:
    config = capture_config()

    edges = [tier["minLongEdge"] for tier in config["recordingTiers"]]
    assert edges == sorted(edges, reverse=True)
    assert edges[0] == 3840
    assert edges[-1] == 0
    assert config["recordingTiers"][0]["bitrate"] == 18_000_000
    assert config["recordingTiers"][0]["timesliceMs"] == 4000
    assert config["mimePreferences"] == list(MIME_PREFERENCES)
    assert config["photoMaxWidth"] == PHOTO_MAX_WIDTH
    assert config["chunkUploadUrl"] == "/api/upload-video-chunk"
