from fastapi import APIRouter, Depends

from odyssey_reader.core.deps import get_reader
from odyssey_reader.models.settings import (
    ApiKeyRequest,
    ApiKeyResponse,
    FontSizeResponse,
    PreferencesResponse,
    PromptRequest,
    PromptResponse,
    PromptSlot,
    QuotaRequest,
    ThemeResponse,
    UsageResponse,
)
from odyssey_reader.services.session import ReaderSession

router = APIRouter(prefix="/v1/settings", tags=["settings"])


def _usage(reader: ReaderSession) -> UsageResponse:
    c = reader.client
    return UsageResponse(
        calls=c.call_count,
        maxApiCalls=c.max_calls,
        estimatedCost=c.estimated_cost,
        nearLimit=c.near_limit,
    )


@router.get("", response_model=PreferencesResponse)
def get_preferences(reader: ReaderSession = Depends(get_reader)):
    return PreferencesResponse(
        theme=reader.theme,
        fontSize=reader.font_size,
        maxApiCalls=reader.client.max_calls,
        hasApiKey=reader.has_api_key,
    )


# ---------- affichage ----------

@router.post("/theme/toggle", response_model=ThemeResponse)
def toggle_theme(reader: ReaderSession = Depends(get_reader)):
    return ThemeResponse(theme=reader.toggle_theme())


@router.post("/font/increase", response_model=FontSizeResponse)
def increase_font(reader: ReaderSession = Depends(get_reader)):
    return FontSizeResponse(fontSize=reader.increase_font_size())


@router.post("/font/decrease", response_model=FontSizeResponse)
def decrease_font(reader: ReaderSession = Depends(get_reader)):
    return FontSizeResponse(fontSize=reader.decrease_font_size())


# ---------- clé API / quota ----------

@router.put("/api-key", response_model=ApiKeyResponse)
def save_api_key(body: ApiKeyRequest, reader: ReaderSession = Depends(get_reader)):
    reader.save_api_key(body.key)
    return ApiKeyResponse(hasApiKey=True)


@router.delete("/api-key", response_model=ApiKeyResponse)
def clear_api_key(reader: ReaderSession = Depends(get_reader)):
    reader.clear_api_key()
    return ApiKeyResponse(hasApiKey=False)


@router.put("/quota", response_model=UsageResponse)
def set_quota(body: QuotaRequest, reader: ReaderSession = Depends(get_reader)):
    reader.set_max_calls(body.maxApiCalls)
    return _usage(reader)


@router.get("/usage", response_model=UsageResponse)
def usage(reader: ReaderSession = Depends(get_reader)):
    return _usage(reader)


# ---------- éditeur de prompts ----------

@router.get("/prompts/{slot}", response_model=PromptResponse)
def get_prompt(slot: PromptSlot, reader: ReaderSession = Depends(get_reader)):
    return PromptResponse(
        slot=slot,
        template=reader.get_prompt(slot.value),
        isDefault=not reader.is_custom_prompt(slot.value),
    )


@router.put("/prompts/{slot}", response_model=PromptResponse)
def save_prompt(slot: PromptSlot, body: PromptRequest, reader: ReaderSession = Depends(get_reader)):
    template = reader.save_prompt(slot.value, body.template)
    return PromptResponse(slot=slot, template=template, isDefault=False)


@router.post("/prompts/{slot}/reset", response_model=PromptResponse)
def reset_prompt(slot: PromptSlot, reader: ReaderSession = Depends(get_reader)):
    template = reader.reset_prompt(slot.value)
    return PromptResponse(slot=slot, template=template, isDefault=True)
