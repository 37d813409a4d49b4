from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False
    )

    # Database
    database_url: str = "sqlite+aiosqlite:///./business_in_rwanda.db"

    # Auth
    secret_key: str = "change-me-in-production"
    session_cookie_name: str = "bir_session"
    session_ttl_days: int = 7
    session_cookie_secure: bool = False
    bcrypt_rounds: int = 12

    # Social login (a provider without credentials is disabled)
    google_client_id: Optional[str] = None
    google_client_secret: Optional[str] = None
    linkedin_client_id: Optional[str] = None
    linkedin_client_secret: Optional[str] = None

    # Listings
    featured_listings_limit: int = 6
    featured_companies_limit: int = 5
    recommended_listings_limit: int = 6
    browse_page_size: int = 10

    # App
    debug: bool = False
    frontend_url: str = "http://localhost:5000"
    api_base_url: str = "http://localhost:8000"
    allowed_origins: str = ""

    def get_frontend_url(self) -> str:
        return self.frontend_url.rstrip("/")

    def oauth_credentials(self, provider: str) -> Optional[tuple[str, str]]:
        """Return (client_id, client_secret) for a provider, or None when not configured."""
        client_id = getattr(self, f"{provider}_client_id", None)
        client_secret = getattr(self, f"{provider}_client_secret", None)
        if not client_id or not client_secret:
            return None
        return client_id, client_secret


settings = Settings()
