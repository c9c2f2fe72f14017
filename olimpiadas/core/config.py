# olimpiadas/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - SUPABASE_URL
      - SUPABASE_KEY (anon key)
      - DATABASE_URL (Supabase Postgres connection string)
      - SUPABASE_JWT_SECRET (JWT signing secret from Supabase project settings)

    Optional:
      - SUPABASE_SERVICE_ROLE_KEY (only used for admin Supabase client)
      - PAYMENT_PROOF_BUCKET (Storage bucket for payment receipts)
      - ADMIN_NOTIFICATION_EMAIL (recipient of payment proof emails)
      - DEPENDENT_MAX_AGE (oldest age accepted for dependent sign-up)
      - CORS_ORIGINS (comma separated list of frontend origins)
      - SMTP_* (outgoing mail, see core/email_client.py)
    """

    PROJECT_NAME: str = "Olimpíadas API"
    API_V1_STR: str = "/api/v1"

    # Supabase / DB config
    SUPABASE_URL: str
    SUPABASE_KEY: str
    DATABASE_URL: str

    # JWT verification (backend-side)
    SUPABASE_JWT_SECRET: str
    SUPABASE_JWT_ALG: str = "HS256"

    # Service role key bypasses RLS (backend only)
    SUPABASE_SERVICE_ROLE_KEY: str | None = None

    # Payment proofs
    PAYMENT_PROOF_BUCKET: str = "comprovantes"
    ADMIN_NOTIFICATION_EMAIL: str = "admin@olimpiadas.com.br"

    # Dependents are children only
    DEPENDENT_MAX_AGE: int = 12

    CORS_ORIGINS: str = "http://localhost:5173,http://127.0.0.1:5173"

    # Outgoing mail. SSL (port 465) and STARTTLS (port 587) are exclusive.
    SMTP_HOST: str | None = None
    SMTP_PORT: int = 587
    SMTP_USERNAME: str | None = None
    SMTP_PASSWORD: str | None = None
    SMTP_FROM_EMAIL: str | None = None
    SMTP_FROM_NAME: str = "Olimpíadas"
    SMTP_USE_TLS: bool = True
    SMTP_USE_SSL: bool = False
    SMTP_TIMEOUT: int = 30

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    def cors_origins_list(self) -> list[str]:
        """Split CORS_ORIGINS into a clean list (empty entries dropped)."""
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
