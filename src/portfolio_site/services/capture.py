"""Capture and recording policy shared with the photobooth page."""

from dataclasses import dataclass

from portfolio_site.domain.capture import TRANSITIONS, CaptureState

MIME_PREFERENCES: tuple[str, ...] = (
    "video/webm;codecs=vp9,opus",
    "video/webm;codecs=vp8,opus",
    "video/webm;codecs=vp9",
    "video/webm;codecs=vp8",
    "video/webm",
    "video/mp4;codecs=avc1,mp4a",
    "video/mp4",
)

PHOTO_MAX_WIDTH = 1920
PHOTO_JPEG_QUALITY = 0.85
REDIRECT_DELAY_MS = 1500


@dataclass(frozen=True)
class RecordingTier:
    """Recorder settings for streams whose long edge reaches min_long_edge."""

    min_long_edge: int
    bitrate: int
    timeslice_ms: int


# Ordered from highest to lowest resolution; higher resolution gets shorter
# chunks so a single chunk stays under the upload ceiling.
RECORDING_TIERS: tuple[RecordingTier, ...] = (
    RecordingTier(min_long_edge=3840, bitrate=18_000_000, timeslice_ms=4000),
    RecordingTier(min_long_edge=2560, bitrate=12_000_000, timeslice_ms=5000),
    RecordingTier(min_long_edge=1920, bitrate=8_000_000, timeslice_ms=6000),
    RecordingTier(min_long_edge=1280, bitrate=5_000_000, timeslice_ms=8000),
    RecordingTier(min_long_edge=0, bitrate=2_500_000, timeslice_ms=10000),
)


def capture_config() -> dict[str, object]:
    """Build the configuration consumed by the photobooth page script."""
    return {
        "states": {state.name: state.value for state in CaptureState},
        "transitions": {
            state.value: sorted(target.value for target in targets)
            for state, targets in TRANSITIONS.items()
        },
        "mimePreferences": list(MIME_PREFERENCES),
        "recordingTiers": [
            {
                "minLongEdge": tier.min_long_edge,
                "bitrate": tier.bitrate,
                "timesliceMs": tier.timeslice_ms,
            }
            for tier in RECORDING_TIERS
        ],
        "photoMaxWidth": PHOTO_MAX_WIDTH,
        "photoJpegQuality": PHOTO_JPEG_QUALITY,
        "redirectDelayMs": REDIRECT_DELAY_MS,
        "uploadUrl": "/api/upload",
        "chunkUploadUrl": "/api/upload-video-chunk",
    }
