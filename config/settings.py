"""
Application settings module
"""
from pydantic_settings import BaseSettings
from typing import List, Optional
from dotenv import load_dotenv

# Load environment variables
load_dotenv(encoding='utf-8')


DEFAULT_SYSTEM_CONTEXT = (
    "You are Brenin AI, a helpful digital human assistant. Provide accurate, helpful, "
    "and engaging responses. Be conversational and friendly."
)


class Settings(BaseSettings):
    """Application settings"""

    # DeepSeek (OpenAI-compatible API)
    deepseek_api_key: Optional[str] = None
    deepseek_base_url: str = "https://api.deepseek.com/v1"
    deepseek_model: str = "deepseek-chat"
    completion_max_tokens: int = 1000
    completion_temperature: float = 0.7
    # One DeepSeek call; must fit inside completion_timeout_seconds
    deepseek_timeout_seconds: float = 20.0

    # Persona sent as the system context when the session supplies none
    system_context: str = DEFAULT_SYSTEM_CONTEXT

    # Upstream collaborators
    completion_endpoint_url: str = "http://localhost:8000/api/deepseek"
    info_service_url: str = "http://localhost:5000"
    request_timeout_seconds: float = 5.0
    completion_timeout_seconds: float = 30.0
    completion_max_retries: int = 1
    completion_retry_delay: float = 0.5

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    info_service_port: int = 5000

    # Chat session
    typing_delay_seconds: float = 1.0
    new_message_highlight_seconds: float = 3.0

    # Attachments
    max_attachments: int = 5
    max_file_size_mb: int = 10
    max_avatar_size_mb: int = 2

    # Logging
    log_level: str = "INFO"
    log_config_path: str = "config/logging.yaml"

    # Environment
    environment: str = "development"

    # CORS
    cors_origins: str = "http://localhost:3000,http://localhost:8080"

    @property
    def cors_origins_list(self) -> List[str]:
        """Split CORS origins into a list"""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024

    @property
    def max_avatar_size_bytes(self) -> int:
        return self.max_avatar_size_mb * 1024 * 1024

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
settings = Settings()
