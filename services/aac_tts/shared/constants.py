"""Shared constants for the TTS service"""

# Polly request parameters
OUTPUT_FORMAT = "mp3"
DEFAULT_VOICE_ID = "Ivy"
DEFAULT_ENGINE = "standard"

# Object naming: tts-<uuid>.mp3
KEY_PREFIX = "tts-"
KEY_SUFFIX = ".mp3"
AUDIO_CONTENT_TYPE = "audio/mpeg"

# Response messages
TEXT_REQUIRED_MESSAGE = "Text input is required."
SYNTHESIS_FAILED_MESSAGE = "Failed to generate speech."
UPLOAD_FAILED_MESSAGE = "S3 Upload Failed"
EMPTY_AUDIO_MESSAGE = "Polly did not return audio."
