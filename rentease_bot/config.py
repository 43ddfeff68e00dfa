from typing import List
from pydantic import validator
from pydantic_settings import BaseSettings
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

class Settings(BaseSettings):
    # Application Settings
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    APP_TIMEZONE: str = os.getenv("APP_TIMEZONE", "Asia/Manila")
    CORS_ORIGINS: List[str] = ["*"]

    # OpenRouter Settings (CHATBOT_API is the legacy variable name)
    OPENROUTER_API_KEY: str = os.getenv("OPENROUTER_API_KEY") or os.getenv("CHATBOT_API", "")
    OPENROUTER_BASE_URL: str = os.getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1")
    APP_REFERER: str = os.getenv("APP_REFERER", "https://rentease.com")
    APP_TITLE: str = os.getenv("APP_TITLE", "RentEase")

    # Model Settings
    CHATBOT_MODEL: str = os.getenv("CHATBOT_MODEL", "meta-llama/llama-3.2-3b-instruct:free")
    CHATBOT_TEMPERATURE: float = float(os.getenv("CHATBOT_TEMPERATURE", "0.3"))
    CHATBOT_MAX_TOKENS: int = int(os.getenv("CHATBOT_MAX_TOKENS", "300"))
    COMPLETION_TIMEOUT_SECONDS: float = float(os.getenv("COMPLETION_TIMEOUT_SECONDS", "20"))

    # Rate Limiting (per client IP, "limits" notation)
    CHATBOT_RATE_LIMIT: str = os.getenv("CHATBOT_RATE_LIMIT", "100/15 minutes")
    RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "True").lower() == "true"

    # Conversation & Filter Limits
    CHAT_HISTORY_WINDOW: int = int(os.getenv("CHAT_HISTORY_WINDOW", "10"))
    FILTER_TEXT_MAX_LENGTH: int = int(os.getenv("FILTER_TEXT_MAX_LENGTH", "200"))
    FILTER_MAX_AMENITIES: int = int(os.getenv("FILTER_MAX_AMENITIES", "20"))

    @validator("COMPLETION_TIMEOUT_SECONDS")
    def validate_timeout(cls, v: float) -> float:
        # The engine must never block indefinitely on the model
        if v <= 0:
            raise ValueError("COMPLETION_TIMEOUT_SECONDS must be greater than 0")
        return v

    @validator("CHAT_HISTORY_WINDOW", "FILTER_MAX_AMENITIES")
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Window and cardinality limits cannot be negative")
        return v

    @validator("FILTER_TEXT_MAX_LENGTH")
    def validate_text_length(cls, v: int) -> int:
        if v < 1:
            raise ValueError("FILTER_TEXT_MAX_LENGTH must be at least 1")
        return v

    class Config:
        case_sensitive = True
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

# Create settings instance
settings = Settings()
