import logging
from typing import Optional

import httpx
from pydantic import BaseModel

from api.utils import config
from api.utils.errors import ProviderCallFailed, ProviderUnavailable

logger = logging.getLogger(__name__)


class ProviderSettings(BaseModel):
    """Credential and endpoint for the AI question provider."""

    model_config = {"frozen": True}

    api_key: Optional[str] = None
    model: str = config.GEMINI_MODEL
    endpoint: str = config.GEMINI_ENDPOINT
    timeout: float = config.PROVIDER_TIMEOUT

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_env(cls) -> "ProviderSettings":
        return cls(api_key=config.GEMINI_API_KEY)


class GeminiClient:
    """Thin async wrapper around the Gemini ``generateContent`` REST call."""

    def __init__(self, settings: ProviderSettings, transport: httpx.AsyncBaseTransport = None):
        self.settings = settings
        self.transport = transport

    @property
    def url(self) -> str:
        return f"{self.settings.endpoint}/models/{self.settings.model}:generateContent"

    async def generate_text(self, prompt: str) -> str:
        if not self.settings.configured:
            raise ProviderUnavailable("Gemini API key is not configured.")

        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        headers = {
            "x-goog-api-key": self.settings.api_key,
            "Content-Type": "application/json",
        }

        async with httpx.AsyncClient(
            timeout=self.settings.timeout, transport=self.transport
        ) as client:
            try:
                response = await client.post(self.url, json=payload, headers=headers)
                response.raise_for_status()
                data = response.json()
            except httpx.HTTPStatusError as e:
                raise ProviderCallFailed(
                    f"Gemini returned {e.response.status_code}: {e.response.text[:200]}"
                ) from e
            except httpx.RequestError as e:
                raise ProviderCallFailed(f"Gemini request error: {str(e)}") from e
            except ValueError as e:
                raise ProviderCallFailed("Gemini response is not JSON.") from e

        try:
            parts = data["candidates"][0]["content"]["parts"]
            text = "".join(part.get("text", "") for part in parts)
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise ProviderCallFailed("Gemini response is missing candidate text.") from e

        logger.debug("Gemini returned %d characters", len(text))
        return text
