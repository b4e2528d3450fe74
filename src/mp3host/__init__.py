"""mp3host - host MP3 files on GitHub and generate speech to host."""

__version__ = "0.1.0"
__all__ = ["synthesize", "upload"]


def __getattr__(name: str):  # type: ignore[no-untyped-def]
    if name in __all__:
        from . import api

        return getattr(api, name)
    raise AttributeError(f"module 'mp3host' has no attribute {name!r}")
