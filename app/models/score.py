# --- Pydantic Models ---
from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, field_validator
from typing import Annotated, Optional, Union
from datetime import datetime, timezone

from .data import INT_MAX, INT_MIN

Integer = Annotated[StrictInt, Field(ge=INT_MIN, le=INT_MAX)]
FiniteFloat = Annotated[StrictFloat, Field(allow_inf_nan=False)]
Number = Union[Integer, FiniteFloat]

class ScoreRequest(BaseModel):
    model_config = ConfigDict(extra='allow', allow_inf_nan=False)

    name: str = Field(..., min_length=1, max_length=100)
    score: Number
    timeUsed: Optional[Number] = None
    allFlipped: Optional[StrictBool] = None
    date: Optional[Union[str, Integer, FiniteFloat]] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('name cannot be empty or whitespace')
        return v.strip()

    def to_entry_data(self) -> dict:
        """Wire entry for the ranking; a missing date becomes the server's current time"""
        data = self.model_dump(exclude_none=True)
        if self.date is None:
            data['date'] = datetime.now(timezone.utc).isoformat()
        return data
