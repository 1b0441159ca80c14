from enum import Enum
from pydantic import BaseModel, Field


class Theme(str, Enum):
    light = "light"
    dark = "dark"


class PromptSlot(str, Enum):
    page = "page"
    selection = "selection"


class PreferencesResponse(BaseModel):
    theme: Theme
    fontSize: int
    maxApiCalls: int
    hasApiKey: bool


class ThemeResponse(BaseModel):
    theme: Theme


class FontSizeResponse(BaseModel):
    fontSize: int


class ApiKeyRequest(BaseModel):
    key: str = Field(..., min_length=1)


class ApiKeyResponse(BaseModel):
    hasApiKey: bool


class QuotaRequest(BaseModel):
    maxApiCalls: int = Field(..., ge=1, le=10000)


class UsageResponse(BaseModel):
    calls: int
    maxApiCalls: int
    estimatedCost: float
    nearLimit: bool


class PromptResponse(BaseModel):
    slot: PromptSlot
    template: str
    isDefault: bool


class PromptRequest(BaseModel):
    template: str = Field(..., min_length=1)
