from pydantic import BaseModel, Field, field_validator
from typing import Optional

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConnectionOverride(BaseModel):
    DATABASE_URL: Optional[str] = Field(None, min_length=1)
    ALLOW_OVERPAYMENT: Optional[bool] = None
    EXPIRY_WARNING_DAYS: Optional[int] = Field(None, ge=1, le=365)
    LOG_LEVEL: Optional[str] = None

    @field_validator("LOG_LEVEL")
    @classmethod
    def known_level(cls, v):
        if v is None:
            return v
        if v.upper() not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return v.upper()


class ConnectionStatus(BaseModel):
    override: ConnectionOverride
    active: ConnectionOverride
    restart_required: bool = False
