"""High-level API for mp3host library usage."""

from pathlib import Path

from .context import AppContext
from .errors import ValidationError
from .progress import ProgressCallback
from .synthesis.models import ReferenceSource, SynthesisRequest
from .workflows.synthesis import SynthesisOutcome
from .workflows.upload import PendingUpload, UploadOutcome, UploadState


async def upload(
    file: str | Path,
    context: AppContext | None = None,
    on_progress: ProgressCallback | None = None,
) -> UploadOutcome:
    """Upload an MP3 file to the configured repository.

    Args:
        file: Path of the file to upload
        context: Application context, created from config if omitted
        on_progress: Receives simulated progress values from 0 to 100

    Returns:
        Outcome with the public URL on success, or the validation
        error if the file is rejected before it is read

    Raises:
        OSError: If the file cannot be read
    """
    context = context or AppContext.create()
    try:
        pending = PendingUpload.from_path(file)
    except ValidationError as e:
        return UploadOutcome(state=UploadState.FAILED, error=e)
    return await context.upload_orchestrator().upload(pending, on_progress)


async def synthesize(
    text: str,
    reference: str | Path | None = None,
    output: str | Path | None = None,
    save: bool = False,
    context: AppContext | None = None,
) -> tuple[SynthesisOutcome, UploadOutcome | None]:
    """Generate speech and optionally save or upload it.

    Args:
        text: Text to speak
        reference: Voice sample file, the default sample is used if omitted
        output: Directory to save the generated WAV file into
        save: Whether to upload the generated audio as MP3
        context: Application context, created from config if omitted

    Returns:
        The synthesis outcome and, if save was requested and synthesis
        succeeded, the upload outcome

    Raises:
        OSError: If the output file cannot be written
    """
    context = context or AppContext.create()
    request = SynthesisRequest(
        text=text,
        reference_source=(
            ReferenceSource.USER_SUPPLIED if reference else ReferenceSource.DEFAULT_URL
        ),
        reference_file=Path(reference) if reference else None,
    )

    orchestrator = context.synthesis_orchestrator()
    outcome = await orchestrator.generate(request)
    if not outcome.succeeded:
        return outcome, None

    if output:
        orchestrator.download(output)

    uploaded = None
    if save:
        uploaded = await orchestrator.save_to_storage(context.upload_orchestrator())
    return outcome, uploaded
