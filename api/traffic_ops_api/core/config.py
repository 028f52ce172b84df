"""Application configuration, read from the environment and ``.env``."""
import sys
from typing import Optional
from pydantic_settings import BaseSettings

DEFAULT_SECRET_KEY = "dev-secret-key-change-in-production"


class Settings(BaseSettings):
    # Storage
    DATABASE_URL: str = "postgresql://traffic_ops:twelve@db:5432/traffic_ops"

    # Bearer tokens; the subject claim carries the tm_user username
    SECRET_KEY: str = DEFAULT_SECRET_KEY
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440
    JWT_ISSUER: Optional[str] = None
    JWT_AUDIENCE: Optional[str] = None

    ENVIRONMENT: str = "development"  # "development" or "production"

    # HTTP server
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8000
    # comma-separated origins of the Traffic Portal UI
    CORS_ORIGINS: str = "http://localhost:8080,https://localhost:8443"

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.strip().lower() == "production"

    def get_cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    def jwt_claims(self) -> dict:
        """Issuer and audience claims stamped on, and required of, every token."""
        claims = {}
        if self.JWT_ISSUER:
            claims["iss"] = self.JWT_ISSUER
        if self.JWT_AUDIENCE:
            claims["aud"] = self.JWT_AUDIENCE
        return claims

    def validate_production_settings(self) -> None:
        """Exit when production would sign tokens with the default key."""
        if self.is_production and self.SECRET_KEY == DEFAULT_SECRET_KEY:
            print("FATAL: SECRET_KEY must be changed in production!", file=sys.stderr)
            sys.exit(1)


settings = Settings()
settings.validate_production_settings()
