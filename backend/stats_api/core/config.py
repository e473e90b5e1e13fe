from pydantic_settings import BaseSettings
from typing import List, Any
import json


def parse_cors_origins(v: Any) -> List[str]:
    """Parse CORS origins from string or list"""
    if isinstance(v, list):
        return v
    if isinstance(v, str):
        # Try JSON parsing first
        if v.startswith('['):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                pass
        # Fall back to comma-separated
        return [origin.strip() for origin in v.split(',') if origin.strip()]
    return []


def parse_languages(v: Any) -> List[str]:
    """Parse supported languages from string or list"""
    if isinstance(v, list):
        return v
    if isinstance(v, str):
        return [lang.strip().lower() for lang in v.split(',') if lang.strip()]
    return []


class Settings(BaseSettings):
    """Application settings - all configurable via environment variables"""

    # ==========================================
    # Application
    # ==========================================
    APP_NAME: str = "STATS API"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    SECRET_KEY: str
    API_VERSION: str = "v1"

    # Server Configuration
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8000

    # ==========================================
    # Database
    # ==========================================
    DATABASE_URL: str
    DB_ECHO: bool = False

    # ==========================================
    # Redis (optional - rate limit storage and health checks)
    # ==========================================
    REDIS_URL: str = ""

    # ==========================================
    # Claude AI (Harmony analysis)
    # ==========================================
    ANTHROPIC_API_KEY: str = ""
    ANTHROPIC_BASE_URL: str = ""  # Empty means use default Anthropic URL
    CLAUDE_MODEL: str = "claude-3-5-haiku-20241022"
    CLAUDE_MAX_TOKENS: int = 2048
    CLAUDE_HARMONY_TEMPERATURE: float = 0.2
    CLAUDE_REQUEST_TIMEOUT: int = 60  # seconds
    CLAUDE_CONNECT_TIMEOUT: int = 10  # seconds

    # ==========================================
    # Harmony cache gateway
    # ==========================================
    HARMONY_CACHE_WINDOW_HOURS: float = 24.0
    HARMONY_DEFAULT_LANGUAGE: str = "fr"
    HARMONY_SUPPORTED_LANGUAGES_STR: str = "en,fr,es"

    @property
    def HARMONY_SUPPORTED_LANGUAGES(self) -> List[str]:
        """Parse supported harmony languages from comma-separated string"""
        return parse_languages(self.HARMONY_SUPPORTED_LANGUAGES_STR)

    # ==========================================
    # Authentication
    # ==========================================
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440  # 24 hours
    REFRESH_TOKEN_EXPIRE_DAYS: int = 30
    BCRYPT_ROUNDS: int = 12  # 4 for dev (fast), 12 for prod (secure)

    # ==========================================
    # CORS (stored as comma-separated string, parsed to list)
    # ==========================================
    CORS_ORIGINS_STR: str = "http://localhost:3000,http://127.0.0.1:3000,http://localhost:8081"

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return parse_cors_origins(self.CORS_ORIGINS_STR)

    # ==========================================
    # Rate Limiting
    # ==========================================
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 60
    RATE_LIMIT_AI_PER_MINUTE: int = 10

    # ==========================================
    # Request limits
    # ==========================================
    MAX_REQUEST_SIZE: int = 1048576  # 1MB - metric snapshots are small

    # ==========================================
    # Logging
    # ==========================================
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""  # Empty means console only

    # ==========================================
    # Visitor (demo) mode
    # ==========================================
    VISITOR_MODE_ENABLED: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env that aren't defined in Settings

    def is_dev_mode(self) -> bool:
        """Check if running in development mode"""
        return self.ENVIRONMENT == "development" or self.DEBUG

    def is_ai_configured(self) -> bool:
        """Check if the language model API key is present"""
        return bool(self.ANTHROPIC_API_KEY and self.ANTHROPIC_API_KEY.strip())


# Create settings instance
settings = Settings()
