# =============================================================================================
# APP/SCHEMAS/CHIRP.PY - PYDANTIC SCHEMAS FOR CHIRPS
# =============================================================================================

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ChirpIn(BaseModel):
    # Length is checked in the route (UTF-8 bytes), after authentication
    body: str = Field(..., examples=["I had something interesting for breakfast"])


class ChirpOut(BaseModel):
    id: UUID
    created_at: datetime
    updated_at: datetime
    body: str
    user_id: UUID

    model_config = ConfigDict(from_attributes=True)
