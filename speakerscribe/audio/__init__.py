"""Audio input: selected file, upload filter, base64 encoding."""
from .receiver import AudioFile, ReadableFile, ensure_accepted_audio, is_accepted_audio
from .encoder import file_to_base64, to_data_url

__all__ = [
    "AudioFile",
    "ReadableFile",
    "ensure_accepted_audio",
    "is_accepted_audio",
    "file_to_base64",
    "to_data_url",
]
