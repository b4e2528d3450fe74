"""Typer CLI definition for mp3host."""

import asyncio
import logging
import sys
from pathlib import Path

import typer

from .audio.player import AudioPlayer
from .context import AppContext
from .errors import Mp3HostError, ValidationError
from .formatting import format_date, format_size
from .synthesis.models import ReferenceSource, SynthesisRequest
from .workflows.upload import PendingUpload, UploadOrchestrator, UploadOutcome

app = typer.Typer(help="Host MP3 files on GitHub and generate speech to host")

SETUP_HINT = "No GitHub token or repository configured. Run 'mp3host setup' first."


def configure_logging(debug: bool) -> None:
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )


def fail(error: Exception, debug: bool, context: str = "") -> typer.Exit:
    """Print an error the way every command does and build the exit."""
    if debug:
        typer.echo(f"Debug - {context or 'Error'}: {error!r}", err=True)
    else:
        typer.echo(f"Error: {error}", err=True)
    return typer.Exit(1)


def process_text_input(text: str | None) -> str:
    """Process text input and return the text to speak, trimmed.

    Args:
        text: Optional text input from CLI argument

    Returns:
        The text to speak

    Raises:
        ValueError: If no text is provided
    """
    if text is None:
        raise ValueError("No text provided")

    return text.strip()


def run_upload(
    orchestrator: UploadOrchestrator, pending: PendingUpload
) -> UploadOutcome:
    """Run an upload while drawing its progress bar on stderr."""
    with typer.progressbar(
        length=100,
        label=f"{pending.name} ({format_size(pending.size)})",
        file=sys.stderr,
    ) as bar:
        shown = 0

        def on_progress(value: float) -> None:
            nonlocal shown
            step = int(value) - shown
            if step > 0:
                bar.update(step)
                shown += step

        return asyncio.run(orchestrator.upload(pending, on_progress))


def report_upload(outcome: UploadOutcome, debug: bool) -> None:
    if not outcome.succeeded:
        raise fail(outcome.error, debug, "Upload failed")
    typer.echo("Upload complete", err=True)
    typer.echo(outcome.url)


@app.command()
def setup(
    token: str | None = typer.Option(None, "--token", help="GitHub access token"),
    repo: str | None = typer.Option(
        None, "--repo", help="Repository that stores the uploads"
    ),
    debug: bool = typer.Option(False, "--debug", help="Show verbose errors"),
) -> None:
    """Save the GitHub token and repository, creating the repository if needed."""
    configure_logging(debug)
    context = AppContext.create()
    current = context.credentials.load()

    if token is None:
        token = typer.prompt("GitHub token", hide_input=True)
    if repo is None:
        default_repo = context.config.upload.default_repository
        repo = typer.prompt(
            "Repository name", default=current.repository_name or default_repo
        )

    try:
        credentials, created = asyncio.run(context.save_credentials(token, repo))
    except ValidationError as e:
        raise fail(e, debug, "Invalid settings") from None
    except Mp3HostError as e:
        typer.echo(
            "Settings saved, but the repository could not be prepared.", err=True
        )
        raise fail(e, debug, "Repository check failed") from None

    typer.echo("Settings saved")
    if created:
        typer.echo(f"Created repository {credentials.repository_name}")


@app.command()
def upload(
    file: Path = typer.Argument(..., help="MP3 file to upload"),
    debug: bool = typer.Option(False, "--debug", help="Show verbose errors"),
) -> None:
    """Upload an MP3 file and print its public URL."""
    configure_logging(debug)
    context = AppContext.create()

    if not context.credentials.load().is_complete:
        typer.echo(SETUP_HINT, err=True)
        raise typer.Exit(1)

    try:
        pending = PendingUpload.from_path(file)
    except ValidationError as e:
        raise fail(e, debug, "Invalid file") from None
    except OSError as e:
        raise fail(e, debug, "File read error") from None

    outcome = run_upload(context.upload_orchestrator(), pending)
    report_upload(outcome, debug)


@app.command()
def history(
    remove: int | None = typer.Option(
        None, "--remove", help="Delete the entry with this number"
    ),
    debug: bool = typer.Option(False, "--debug", help="Show verbose errors"),
) -> None:
    """List past uploads, newest first."""
    configure_logging(debug)
    context = AppContext.create()

    if remove is not None:
        try:
            entry = context.history.remove(remove - 1)
        except IndexError as e:
            raise fail(e, debug, "History error") from None
        typer.echo(f"Removed {entry.file_name}")
        return

    entries = context.history.entries()
    if not entries:
        typer.echo("No uploads yet")
        return

    for number, entry in enumerate(entries, 1):
        typer.echo(
            f"{number}. {entry.file_name}  "
            f"{format_date(entry.created_at)} · {format_size(entry.size_bytes)}"
        )
        typer.echo(f"   {entry.url}")


@app.command()
def synthesize(
    text: str | None = typer.Argument(None, help="Text to convert to speech"),
    file: Path | None = typer.Option(None, "-f", "--file", help="Read text from file"),
    reference: Path | None = typer.Option(
        None,
        "-r",
        "--reference",
        help="Voice sample to imitate (default sample if omitted)",
    ),
    output: Path | None = typer.Option(
        None, "-o", "--output", help="Directory for the generated WAV file"
    ),
    no_download: bool = typer.Option(
        False, "--no-download", help="Do not save the generated WAV file"
    ),
    save: bool = typer.Option(
        False, "--save", help="Upload the generated speech to GitHub as MP3"
    ),
    play: bool = typer.Option(False, "--play", help="Play the generated speech"),
    debug: bool = typer.Option(False, "--debug", help="Show verbose errors"),
) -> None:
    """Generate speech from text in the voice of a reference sample."""
    configure_logging(debug)

    if text is None:
        if file:
            try:
                text = file.read_text()
            except (OSError, UnicodeDecodeError) as e:
                raise fail(e, debug, "File read error") from None
        elif not sys.stdin.isatty():
            text = sys.stdin.read()

    try:
        text = process_text_input(text)
    except ValueError as e:
        raise fail(e, debug, "Text processing error") from None

    context = AppContext.create()
    if save and not context.credentials.load().is_complete:
        typer.echo(SETUP_HINT, err=True)
        raise typer.Exit(1)

    request = SynthesisRequest(
        text=text,
        reference_source=(
            ReferenceSource.USER_SUPPLIED if reference else ReferenceSource.DEFAULT_URL
        ),
        reference_file=reference,
    )
    orchestrator = context.synthesis_orchestrator()
    typer.echo("Generating speech...", err=True)
    outcome = asyncio.run(orchestrator.generate(request))
    if not outcome.succeeded:
        raise fail(outcome.error, debug, "Synthesis failed")

    if not no_download:
        try:
            directory = output or context.config.synthesis.output_dir
            path = orchestrator.download(directory)
        except OSError as e:
            raise fail(e, debug, "File system error") from None
        typer.echo(f"Audio saved to {path}")

    if play:
        try:
            AudioPlayer().play_bytes(outcome.result.audio)
        except RuntimeError as e:
            raise fail(e, debug, "Audio playback error") from None

    if save:
        try:
            pending = orchestrator.to_pending_upload()
        except ValidationError as e:
            raise fail(e, debug, "Conversion error") from None
        report_upload(run_upload(context.upload_orchestrator(), pending), debug)
