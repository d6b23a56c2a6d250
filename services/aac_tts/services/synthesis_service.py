"""Text to stored audio pipeline

Orchestrates the flow: validate → Polly → temp file → S3 → URL.
Every failure is raised as a ``TTSServiceError`` subclass; nothing is retried.
"""

import asyncio
import logging
import os
import uuid
from dataclasses import dataclass

from ..shared.constants import EMPTY_AUDIO_MESSAGE, KEY_PREFIX, KEY_SUFFIX, OUTPUT_FORMAT
from ..shared.errors import (
    InvalidInput,
    StorageError,
    SynthesisError,
    TTSServiceError,
    UnexpectedError,
)

logger = logging.getLogger(__name__)


@dataclass
class AudioArtifact:
    audio: bytes
    format: str = OUTPUT_FORMAT


@dataclass
class StoredObjectReference:
    key: str
    url: str


def new_object_key() -> str:
    return f"{KEY_PREFIX}{uuid.uuid4()}{KEY_SUFFIX}"


def validate_text(text) -> str:
    """Return ``text`` if it can be synthesized, else raise ``InvalidInput``"""
    if not isinstance(text, str) or not text.strip():
        raise InvalidInput()
    return text


def _write_file(path: str, data: bytes) -> None:
    with open(path, "wb") as f:
        f.write(data)


class SynthesisPipeline:
    """Runs one synthesis request from text to a stored object URL.

    ``synthesizer`` needs ``async synthesize(text) -> bytes``; ``store`` needs
    ``async upload(key, path)`` and ``object_url(key) -> str``.
    """

    def __init__(self, synthesizer, store, temp_dir: str):
        self.synthesizer = synthesizer
        self.store = store
        self.temp_dir = temp_dir

    async def synthesize(self, text: str) -> AudioArtifact:
        logger.info("Sending request to Polly (%d chars)", len(text))
        try:
            audio = await self.synthesizer.synthesize(text)
        except TTSServiceError:
            raise
        except Exception as e:
            raise SynthesisError(str(e)) from e
        if not audio:
            raise SynthesisError(EMPTY_AUDIO_MESSAGE)
        return AudioArtifact(audio=audio)

    def temp_path(self, key: str) -> str:
        return os.path.join(self.temp_dir, key)

    async def materialize(self, artifact: AudioArtifact, path: str) -> None:
        write = asyncio.ensure_future(asyncio.to_thread(_write_file, path, artifact.audio))
        try:
            await asyncio.shield(write)
        except asyncio.CancelledError:
            # The worker thread cannot be stopped; let it finish so cleanup finds the file
            await asyncio.wait([write])
            raise
        except OSError as e:
            raise UnexpectedError(f"Failed to write temporary audio file: {e}") from e
        logger.info("Saved audio file to %s", path)

    async def persist(self, key: str, path: str) -> str:
        logger.info("Uploading %s to S3...", key)
        try:
            await self.store.upload(key, path)
        except TTSServiceError:
            raise
        except Exception as e:
            raise StorageError(str(e)) from e
        url = self.store.object_url(key)
        logger.info("Audio uploaded: %s", url)
        return url

    def cleanup(self, path: str) -> None:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not remove temporary file %s: %s", path, e)

    async def run(self, text) -> StoredObjectReference:
        text = validate_text(text)
        logger.info("Validated synthesize request")
        artifact = await self.synthesize(text)
        logger.info("Synthesized %d bytes of audio", len(artifact.audio))

        key = new_object_key()
        path = self.temp_path(key)
        try:
            await self.materialize(artifact, path)
            url = await self.persist(key, path)
        finally:
            self.cleanup(path)
        logger.info("Responding with %s", url)
        return StoredObjectReference(key=key, url=url)
