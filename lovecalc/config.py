"""Application configuration loaded from environment variables."""

from pydantic_settings import BaseSettings

# Value shipped in .env templates; treated the same as an unset key
PLACEHOLDER_API_KEY = "your_dashscope_api_key_here"


class Settings(BaseSettings):
    # LLM
    DASHSCOPE_API_KEY: str = ""
    LLM_MODEL: str = "qwen-plus"
    LLM_TIMEOUT: float = 15.0  # seconds before a message request counts as failed

    # Progress animation
    PROGRESS_TICK_MS: int = 40

    # App
    APP_ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def has_llm_credentials(self) -> bool:
        key = self.DASHSCOPE_API_KEY.strip()
        return bool(key) and key != PLACEHOLDER_API_KEY


settings = Settings()
