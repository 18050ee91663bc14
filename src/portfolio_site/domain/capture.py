"""Photobooth capture flow states."""

from enum import Enum


class CaptureState(str, Enum):
    """States of the in-browser capture flow."""

    IDLE = "idle"
    CAMERA_STARTING = "camera-starting"
    CAMERA_READY = "camera-ready"
    PHOTO_TAKEN = "photo-taken"
    UPLOADING = "uploading"
    DONE = "done"
    ERROR = "error"


# ERROR and IDLE (teardown) are reachable from every state and are added below.
_FORWARD: dict[CaptureState, frozenset[CaptureState]] = {
    CaptureState.IDLE: frozenset({CaptureState.CAMERA_STARTING}),
    CaptureState.CAMERA_STARTING: frozenset({CaptureState.CAMERA_READY}),
    CaptureState.CAMERA_READY: frozenset({CaptureState.PHOTO_TAKEN}),
    CaptureState.PHOTO_TAKEN: frozenset(
        {CaptureState.UPLOADING, CaptureState.CAMERA_READY}
    ),
    CaptureState.UPLOADING: frozenset({CaptureState.DONE, CaptureState.PHOTO_TAKEN}),
    CaptureState.DONE: frozenset(),
    CaptureState.ERROR: frozenset({CaptureState.CAMERA_STARTING}),
}

TRANSITIONS: dict[CaptureState, frozenset[CaptureState]] = {
    state: targets | {CaptureState.ERROR, CaptureState.IDLE}
    for state, targets in _FORWARD.items()
}
