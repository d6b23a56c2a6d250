from pydantic import BaseModel
from typing import Optional

class SynthesizeResponse(BaseModel):
    url: str

class LivenessResponse(BaseModel):
    message: str

class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
