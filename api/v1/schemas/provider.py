from pydantic import BaseModel, Field, field_validator


class ApiKeyRequest(BaseModel):
    api_key: str = Field(min_length=1)

    @field_validator("api_key")
    @classmethod
    def strip_key(cls, value: str) -> str:
        key = value.strip()
        if not key:
            raise ValueError("API key must not be blank")
        return key


class ProviderStatus(BaseModel):
    configured: bool
    model: str
    timeout: float
