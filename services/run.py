import logging

import uvicorn
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from aac_tts.main import configure_logging  # noqa: E402
from aac_tts.shared.config import get_settings  # noqa: E402

if __name__ == "__main__":
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = logging.getLogger("aac_tts")
    logger.info("Starting AAC TTS Service (%s) on http://%s:%s", settings.environment, settings.host, settings.port)
    logger.info("Region: %s, bucket: %s", settings.region, settings.bucket_name)

    uvicorn.run("aac_tts.main:app", host=settings.host, port=settings.port)
