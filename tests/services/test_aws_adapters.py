import io
import logging

import boto3
import pytest
from botocore.response import StreamingBody
from botocore.stub import ANY, Stubber

from aac_tts.services.polly_service import PollySynthesizer
from aac_tts.services.storage_service import S3AudioStore
from aac_tts.shared.config import Settings
from aac_tts.shared.errors import StorageError, SynthesisError


def make_client(service):
    return boto3.client(
        service,
        region_name="us-east-2",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


def audio_stream(data: bytes) -> StreamingBody:
    return StreamingBody(io.BytesIO(data), len(data))


@pytest.fixture
def polly_client():
    return make_client("polly")


@pytest.fixture
def s3_client():
    return make_client("s3")


@pytest.mark.asyncio
async def test_polly_sends_fixed_parameters(polly_client):
    synthesizer = PollySynthesizer(polly_client)
    with Stubber(polly_client) as stubber:
        stubber.add_response(
            "synthesize_speech",
            {"AudioStream": audio_stream(b"\x01\x02"), "ContentType": "audio/mpeg"},
            {"Text": "Hello", "OutputFormat": "mp3", "VoiceId": "Ivy", "Engine": "standard"},
        )
        audio = await synthesizer.synthesize("Hello")
        stubber.assert_no_pending_responses()

    assert audio == b"\x01\x02"


@pytest.mark.asyncio
async def test_polly_client_error_becomes_synthesis_error(polly_client):
    synthesizer = PollySynthesizer(polly_client)
    with Stubber(polly_client) as stubber:
        stubber.add_client_error(
            "synthesize_speech",
            service_error_code="ThrottlingException",
            service_message="Rate exceeded",
            http_status_code=400,
        )
        with pytest.raises(SynthesisError) as exc_info:
            await synthesizer.synthesize("Hello")

    assert exc_info.value.details == "Rate exceeded"


@pytest.mark.asyncio
@pytest.mark.parametrize("response", [
    {"ContentType": "audio/mpeg"},
    {"AudioStream": audio_stream(b""), "ContentType": "audio/mpeg"},
])
async def test_polly_without_audio_is_synthesis_error(polly_client, response):
    synthesizer = PollySynthesizer(polly_client)
    with Stubber(polly_client) as stubber:
        stubber.add_response("synthesize_speech", response)
        with pytest.raises(SynthesisError) as exc_info:
            await synthesizer.synthesize("Hello")

    assert exc_info.value.details == "Polly did not return audio."


def test_polly_from_settings_uses_configured_voice():
    settings = Settings(region="eu-west-1", voice_id="Joanna", engine="neural")
    synthesizer = PollySynthesizer.from_settings(settings)

    assert synthesizer.client.meta.region_name == "eu-west-1"
    assert synthesizer.request_params("Hi") == {
        "Text": "Hi",
        "OutputFormat": "mp3",
        "VoiceId": "Joanna",
        "Engine": "neural",
    }


@pytest.mark.asyncio
async def test_s3_upload_streams_file_with_content_type(s3_client, tmp_path):
    path = tmp_path / "tts-abc.mp3"
    path.write_bytes(b"\x01\x02")
    store = S3AudioStore(s3_client, bucket_name="aac-tts-audio", region="us-east-2")

    with Stubber(s3_client) as stubber:
        stubber.add_response(
            "put_object",
            {"ETag": '"abc"'},
            {"Bucket": "aac-tts-audio", "Key": "tts-abc.mp3", "Body": ANY, "ContentType": "audio/mpeg"},
        )
        await store.upload("tts-abc.mp3", str(path))
        stubber.assert_no_pending_responses()


@pytest.mark.asyncio
async def test_s3_rejection_becomes_storage_error(s3_client, tmp_path, caplog):
    caplog.set_level(logging.DEBUG, logger="aac_tts")
    path = tmp_path / "tts-abc.mp3"
    path.write_bytes(b"\x01\x02")
    store = S3AudioStore(s3_client, bucket_name="aac-tts-audio", region="us-east-2")

    with Stubber(s3_client) as stubber:
        stubber.add_client_error(
            "put_object",
            service_error_code="AccessDenied",
            service_message="Access Denied",
            http_status_code=403,
        )
        with pytest.raises(StorageError) as exc_info:
            await store.upload("tts-abc.mp3", str(path))

    assert exc_info.value.details == "Access Denied"
    assert not [r for r in caplog.records if r.levelno >= logging.ERROR]


def test_object_url_is_deterministic(s3_client):
    store = S3AudioStore(s3_client, bucket_name="aac-tts-audio", region="us-east-2")
    assert store.object_url("tts-1.mp3") == "https://aac-tts-audio.s3.us-east-2.amazonaws.com/tts-1.mp3"
    assert store.object_url("tts-1.mp3") == store.object_url("tts-1.mp3")
