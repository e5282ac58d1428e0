from typing import List, Optional

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str = "sqlite:///./autoblog.db"

    # API
    API_TITLE: str = "AutoBlog API"
    API_VERSION: str = "1.0.0"
    DEBUG: bool = False
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # Security
    SECRET_KEY: str = "change-me"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7

    # Gemini
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_TEMPERATURE: float = 0.7
    GEMINI_TOP_K: int = 40
    GEMINI_TOP_P: float = 0.95
    GEMINI_MAX_OUTPUT_TOKENS: int = 16384
    GEMINI_REQUEST_TIMEOUT: int = 120
    # USD per 1K tokens; free tier costs nothing
    GEMINI_INPUT_COST_PER_1K: float = 0.0
    GEMINI_OUTPUT_COST_PER_1K: float = 0.0

    # Site
    SITE_NAME: str = "AutoBlog"
    SITE_URL: str = "http://localhost:3000"
    GOOGLE_ANALYTICS_ID: Optional[str] = None
    POSTS_PER_PAGE: int = 12

    # Seed admin
    ADMIN_EMAIL: str = "admin@autoblog.com"
    ADMIN_PASSWORD: str = "admin123"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

# Create settings instance
settings = Settings()
