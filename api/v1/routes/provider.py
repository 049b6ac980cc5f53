import logging

from fastapi import APIRouter, Depends, Request

from api.utils.gemini_client import ProviderSettings
from api.v1.schemas import provider as schemas

provider = APIRouter(prefix="/provider", tags=["Provider"])
logger = logging.getLogger(__name__)


def get_provider_settings(request: Request) -> ProviderSettings:
    settings = getattr(request.app.state, "provider_settings", None)
    if settings is None:
        settings = ProviderSettings.from_env()
        request.app.state.provider_settings = settings
    return settings


def _status(settings: ProviderSettings) -> schemas.ProviderStatus:
    return schemas.ProviderStatus(
        configured=settings.configured, model=settings.model, timeout=settings.timeout
    )


@provider.get("", response_model=schemas.ProviderStatus)
def get_provider_status(settings: ProviderSettings = Depends(get_provider_settings)):
    return _status(settings)


# Last writer wins; requests already holding the old settings keep them.
@provider.put("/api-key", response_model=schemas.ProviderStatus)
def set_api_key(
    payload: schemas.ApiKeyRequest,
    request: Request,
    settings: ProviderSettings = Depends(get_provider_settings),
):
    updated = settings.model_copy(update={"api_key": payload.api_key})
    request.app.state.provider_settings = updated
    logger.info("AI provider API key updated")
    return _status(updated)


@provider.delete("/api-key", response_model=schemas.ProviderStatus)
def clear_api_key(
    request: Request,
    settings: ProviderSettings = Depends(get_provider_settings),
):
    updated = settings.model_copy(update={"api_key": None})
    request.app.state.provider_settings = updated
    logger.info("AI provider API key cleared; template questions only")
    return _status(updated)
