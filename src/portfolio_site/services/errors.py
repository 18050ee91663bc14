"""Errors raised for rejected uploads."""


class UploadRejectedError(ValueError):
    """An upload the caller must fix before retrying."""

    status_code = 400


class PayloadTooLargeError(UploadRejectedError):
    """An upload above the size ceiling."""

    status_code = 413
