"""Request and response bodies of the shrink API."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr, field_validator

from shrinker.utils.helpers import parse_expire_date


class CreateShrinkRequest(BaseModel):
    """Body of POST /api/shrink/

    expireDate must be formatted as YYYY-MM-DDTHH:MM:SS.sssZ.
    """

    model_config = ConfigDict(populate_by_name=True)

    origin: StrictStr
    target: StrictStr
    status_code: StrictInt = Field(alias='statusCode', ge=0)
    expire_date: Optional[datetime] = Field(default=None, alias='expireDate')
    overwrite: StrictBool = True

    @field_validator('expire_date', mode='before')
    @classmethod
    def validate_expire_date(cls, value):
        if value is None:
            return None
        return parse_expire_date(value)


class GenerateOriginResponse(BaseModel):
    origin: str


class ValidateOriginRequest(BaseModel):
    origin: StrictStr


class GenerateQRCodeRequest(BaseModel):
    shrink: StrictStr
