"""Configuration management for the Gemina invoice client."""

from typing import Optional

from pydantic import SecretStr
from pydantic_settings import BaseSettings

from gemina.errors import ConfigurationError


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    # Credentials
    api_key: SecretStr = SecretStr("")
    client_id: str = ""

    # API
    base_url: str = "https://api.gemina.co.il/v1"
    use_llm: Optional[bool] = True
    request_timeout_seconds: float = 30.0

    # Polling
    poll_interval_ms: int = 1000
    max_attempts: Optional[int] = 120
    deadline_seconds: Optional[float] = None

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"

    @property
    def poll_interval_seconds(self) -> float:
        """Delay between poll attempts in seconds."""
        return self.poll_interval_ms / 1000.0

    def require_credentials(self) -> None:
        """Raise ConfigurationError unless the API key and client id are set."""
        if not self.api_key.get_secret_value():
            raise ConfigurationError("API key is not set (GEMINA_API_KEY)")
        if not self.client_id:
            raise ConfigurationError("Client id is not set (GEMINA_CLIENT_ID)")

    def endpoint_url(self, path: str) -> str:
        """Join the API root with an endpoint path."""
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    class Config:
        env_prefix = "GEMINA_"
        env_file = ".env"
        env_file_encoding = "utf-8"
