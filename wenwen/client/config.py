"""Client configuration with environment variable loading.

Pydantic-based configuration for the chat completion client.
Targets DeepSeek by default; any OpenAI-compatible API works via DEEPSEEK_BASE_URL.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class ClientConfig(BaseModel):
    """Configuration for the chat completion client.

    Attributes:
        api_key: Bearer token for the completion endpoint.
        base_url: API base URL; requests go to {base_url}/v1.
        model_name: Model identifier to request.
        stream: Ask the server for a chunked SSE reply.
        timeout: Request timeout in seconds.
        system_prompt: Optional instruction prepended to every request.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("DEEPSEEK_API_KEY", ""),
        validate_default=True,
        description="API key for the completion endpoint",
    )
    base_url: str = Field(
        default_factory=lambda: os.getenv("DEEPSEEK_BASE_URL", "https://api.deepseek.com"),
        validate_default=True,
        description="API base URL",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("DEEPSEEK_MODEL", "deepseek-chat"),
        description="Model to use",
    )
    stream: bool = Field(
        default=True,
        description="Request a server-sent-event stream instead of a single body",
    )
    timeout: float = Field(
        default=120.0,
        gt=0.0,
        description="Request timeout in seconds",
    )
    system_prompt: str | None = Field(
        default_factory=lambda: os.getenv("WENWEN_SYSTEM_PROMPT") or None,
        description="Instruction sent as the first turn of every request",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("API key required. Set DEEPSEEK_API_KEY in .env")
        return v.strip()

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def api_base_url(self) -> str:
        return f"{self.base_url}/v1"

    @property
    def completions_url(self) -> str:
        return f"{self.api_base_url}/chat/completions"


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.

    Raises:
        ValueError: If no API key is set.
    """
    return ClientConfig()
