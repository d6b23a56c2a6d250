from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
import logging

from ..services.synthesis_service import SynthesisPipeline
from ..shared.errors import InvalidInput, TTSServiceError, UnexpectedError
from ..shared.schemas import ErrorResponse, LivenessResponse, SynthesizeRequest, SynthesizeResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def get_pipeline(request: Request) -> SynthesisPipeline:
    return request.app.state.pipeline


def error_response(err: TTSServiceError) -> JSONResponse:
    return JSONResponse(status_code=err.status_code, content=err.to_response())


@router.get("/test", response_model=LivenessResponse)
async def liveness(request: Request):
    """Liveness check"""
    return {"message": request.app.state.settings.liveness_message}


@router.post(
    "/synthesize",
    response_model=SynthesizeResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def synthesize_speech_endpoint(
    payload: SynthesizeRequest,
    pipeline: SynthesisPipeline = Depends(get_pipeline),
):
    try:
        stored = await pipeline.run(payload.text)
    except InvalidInput as e:
        logger.info("Rejected synthesize request: %s", e.message)
        return error_response(e)
    except TTSServiceError as e:
        logger.error("Error generating speech: %s (%s)", e.message, e.details)
        return error_response(e)
    except Exception as e:
        logger.exception("Unexpected error generating speech")
        return error_response(UnexpectedError(str(e)))

    return SynthesizeResponse(url=stored.url)
