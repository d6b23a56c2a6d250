import asyncio
import logging

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..shared.config import Settings
from ..shared.constants import DEFAULT_ENGINE, DEFAULT_VOICE_ID, EMPTY_AUDIO_MESSAGE, OUTPUT_FORMAT
from ..shared.errors import SynthesisError

logger = logging.getLogger(__name__)

# Failures surface to the caller on the first attempt
NO_RETRY_CONFIG = Config(retries={"total_max_attempts": 1, "mode": "standard"})


def aws_error_message(err: Exception) -> str:
    """Return the service's own message for a botocore error"""
    if isinstance(err, ClientError):
        error = err.response.get("Error", {})
        return error.get("Message") or error.get("Code") or str(err)
    return str(err)


class PollySynthesizer:
    """Service for Amazon Polly text-to-speech"""

    def __init__(self, client, voice_id: str = DEFAULT_VOICE_ID, engine: str = DEFAULT_ENGINE,
                 output_format: str = OUTPUT_FORMAT):
        self.client = client
        self.voice_id = voice_id
        self.engine = engine
        self.output_format = output_format

    @classmethod
    def from_settings(cls, settings: Settings) -> "PollySynthesizer":
        client = boto3.client("polly", region_name=settings.region, config=NO_RETRY_CONFIG)
        return cls(client, voice_id=settings.voice_id, engine=settings.engine)

    def request_params(self, text: str) -> dict:
        return {
            "Text": text,
            "OutputFormat": self.output_format,
            "VoiceId": self.voice_id,
            "Engine": self.engine,
        }

    def _synthesize_blocking(self, text: str) -> bytes:
        params = self.request_params(text)
        logger.debug("Polly input: %s", params)
        try:
            response = self.client.synthesize_speech(**params)
        except (ClientError, BotoCoreError) as e:
            logger.debug("Polly error: %s", e)
            raise SynthesisError(aws_error_message(e)) from e

        stream = response.get("AudioStream")
        if stream is None:
            logger.debug("Polly returned an empty AudioStream")
            raise SynthesisError(EMPTY_AUDIO_MESSAGE)
        try:
            audio = stream.read()
        except (BotoCoreError, OSError) as e:
            raise SynthesisError(f"Failed to read Polly audio stream: {e}") from e
        finally:
            stream.close()

        if not audio:
            logger.debug("Polly returned an empty AudioStream")
            raise SynthesisError(EMPTY_AUDIO_MESSAGE)
        return audio

    async def synthesize(self, text: str) -> bytes:
        """Synthesize ``text`` to MP3 bytes"""
        return await asyncio.to_thread(self._synthesize_blocking, text)
