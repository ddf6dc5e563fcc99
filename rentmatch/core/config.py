from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # === PUBLIC DATA (not secrets) ===
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Rental Request Matching API"

    # === DATABASE SETTINGS (from .env) ===
    MONGODB_URL: str = Field(..., description="MongoDB connection string (database name included)")

    # === APPLICATION SETTINGS ===
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="INFO")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=30)

    # === MATCHING SETTINGS ===
    MATCH_SCORE_THRESHOLD: int = Field(
        default=50, ge=0, description="Minimum aggregate score for a property to count as a match"
    )
    MATCH_CANDIDATE_LIMIT: int = Field(
        default=1000, ge=1, description="Upper bound on properties fetched from the catalog per match run"
    )
    SINGLE_PAIR_FULL_SCORING: bool = Field(
        default=True,
        description="Score every component in the single property check (False = budget-only legacy scoring)",
    )
    DEFAULT_CURRENCY: str = Field(default="LKR", description="Budget currency used when a request omits it")

    # === SECRETS (from .env) ===
    SECRET_KEY: str = Field(..., description="Secret key for JWT tokens")

    # === WEB APP SETTINGS ===
    CORS_ORIGINS: str = Field(default="", description="Allowed CORS origins (comma-separated). Empty = allow all.")

    @property
    def cors_origins_list(self) -> List[str]:
        """Get allowed CORS origins as a list"""
        if not self.CORS_ORIGINS:
            return ["*"]

        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
