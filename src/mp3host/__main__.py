"""Entry point for running mp3host as a module."""

from .cli import app


def main() -> None:
    """Main entry point for the mp3host CLI application."""
    app()


if __name__ == "__main__":
    main()
