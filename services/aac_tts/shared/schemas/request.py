from pydantic import BaseModel, ConfigDict
from typing import Optional

class SynthesizeRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: Optional[str] = None
