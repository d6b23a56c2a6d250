import os
import tempfile
from functools import lru_cache
from pathlib import Path
from dotenv import load_dotenv

from .constants import DEFAULT_ENGINE, DEFAULT_VOICE_ID


services_dir = Path(__file__).parent.parent.parent
env_path = services_dir / ".env"
if env_path.exists():
    load_dotenv(dotenv_path=env_path)
else:
    # Try loading from current directory or parent directories
    load_dotenv()


def _first_env(*names, default=None):
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return default


class Settings:
    """Runtime configuration for the synthesis service.

    Keyword arguments win over the environment, the environment wins over
    the defaults. The serverless deployment sets the bucket through
    HOSTING_S3ANDCLOUDFRONT_HOSTINGBUCKETNAME, so it is read as a fallback.
    """

    def __init__(
        self,
        region: str | None = None,
        bucket_name: str | None = None,
        voice_id: str | None = None,
        engine: str | None = None,
        temp_dir: str | None = None,
        liveness_message: str | None = None,
        allowed_origins: list[str] | None = None,
        host: str | None = None,
        port: int | None = None,
        log_level: str | None = None,
        environment: str | None = None,
    ):
        self.environment = environment or os.getenv("ENVIRONMENT", "development")
        self.log_level = log_level or os.getenv("LOG_LEVEL", "INFO")
        self.region = region or _first_env("REGION", "AWS_REGION", default="us-east-2")
        self.bucket_name = bucket_name or _first_env(
            "BUCKET_NAME", "HOSTING_S3ANDCLOUDFRONT_HOSTINGBUCKETNAME", default="aac-tts-audio"
        )
        self.voice_id = voice_id or os.getenv("POLLY_VOICE_ID", DEFAULT_VOICE_ID)
        self.engine = engine or os.getenv("POLLY_ENGINE", DEFAULT_ENGINE)
        self.temp_dir = temp_dir or os.getenv("TTS_TEMP_DIR") or tempfile.gettempdir()
        self.liveness_message = liveness_message or os.getenv("LIVENESS_MESSAGE", "Server is running")
        self.host = host or os.getenv("HOST", "0.0.0.0")
        self.port = port or int(os.getenv("PORT", "5000"))
        if allowed_origins is None:
            # Comma-separated list of allowed origins for CORS (e.g. https://app.example.com)
            raw = os.getenv("ALLOWED_ORIGINS", "*")
            allowed_origins = [o.strip() for o in raw.split(",") if o.strip()]
        self.allowed_origins = allowed_origins


@lru_cache()
def get_settings():
    return Settings()
