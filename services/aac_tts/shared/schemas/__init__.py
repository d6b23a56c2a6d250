from .request import SynthesizeRequest
from .response import SynthesizeResponse, LivenessResponse, ErrorResponse

__all__ = ["SynthesizeRequest", "SynthesizeResponse", "LivenessResponse", "ErrorResponse"]
