"""Upload and synthesis workflows."""

from .synthesis import (
    SynthesisOrchestrator,
    SynthesisOutcome,
    SynthesisResult,
    SynthesisState,
)
from .upload import (
    MAX_UPLOAD_BYTES,
    PendingUpload,
    UploadOrchestrator,
    UploadOutcome,
    UploadState,
    validate_upload,
)

__all__ = [
    "MAX_UPLOAD_BYTES",
    "PendingUpload",
    "SynthesisOrchestrator",
    "SynthesisOutcome",
    "SynthesisResult",
    "SynthesisState",
    "UploadOrchestrator",
    "UploadOutcome",
    "UploadState",
    "validate_upload",
]
