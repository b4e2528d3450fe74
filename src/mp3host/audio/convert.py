"""Audio container conversion."""

import io

import soundfile as sf

from ..errors import ValidationError


def wav_to_mp3(audio_data: bytes) -> bytes:
    """Re-encode WAV (or any libsndfile-readable) audio as MP3.

    Raises:
        ValidationError: If the audio cannot be decoded or encoded
    """
    try:
        samples, samplerate = sf.read(io.BytesIO(audio_data))
        buf = io.BytesIO()
        sf.write(buf, samples, samplerate, format="MP3")
    except (sf.LibsndfileError, RuntimeError, TypeError, ValueError) as e:
        raise ValidationError(
            f"Could not convert generated audio to MP3: {e}", e
        ) from e
    return buf.getvalue()
