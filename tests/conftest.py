import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from aac_tts.main import create_app
from aac_tts.shared.config import Settings

from fakes import FakeStore, FakeSynthesizer


@pytest.fixture
def settings(tmp_path):
    return Settings(
        region="us-east-2",
        bucket_name="test-bucket",
        temp_dir=str(tmp_path),
        liveness_message="Server is running",
        allowed_origins=["*"],
        environment="test",
    )


@pytest.fixture
def synthesizer():
    return FakeSynthesizer()


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def app(settings, synthesizer, store):
    return create_app(settings, synthesizer=synthesizer, store=store)


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
