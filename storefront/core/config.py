"""
Centralized application configuration

All values come from environment variables or the .env file. Every field has a
default so the package can be imported without credentials; the components that
need a credential validate it when they are built.
"""
from decimal import Decimal
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Storefront settings"""

    # API Settings
    API_TITLE: str = "Storefront API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "Backend API for the multi-vendor storefront"
    LOG_LEVEL: str = "INFO"

    # Database (Supabase Postgres)
    DATABASE_URL: str = ""
    SUPABASE_URL: str = ""
    SUPABASE_ANON_KEY: str = ""
    SUPABASE_SERVICE_ROLE_KEY: str = ""
    SUPABASE_JWT_SECRET: str = ""

    # CORS - comma-separated or JSON array
    ALLOWED_ORIGINS: Optional[str] = "http://localhost:5173,http://localhost:3000"

    # Storefront
    SITE_URL: str = "http://localhost:5173"
    API_BASE_URL: str = "http://localhost:8000"
    SITE_NAME: str = "Synerge Square"
    CURRENCY: str = "ZAR"
    VAT_RATE: Decimal = Decimal("0.15")

    # PayFast (public sandbox credentials by default)
    PAYFAST_MERCHANT_ID: str = "10000100"
    PAYFAST_MERCHANT_KEY: str = "46f0cd694581a"
    PAYFAST_PASSPHRASE: str = "jt7NOE43FZPn"
    PAYFAST_SANDBOX: bool = True
    PAYFAST_VALIDATE_ITN: bool = False

    # WeFulFil
    WEFULLFIL_API_TOKEN: str = ""
    WEFULLFIL_BASE_URL: str = "https://app.wefullfill.com"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    def get_allowed_origins(self) -> List[str]:
        """Parse ALLOWED_ORIGINS string into list"""
        if not self.ALLOWED_ORIGINS:
            return ["http://localhost:5173"]

        import json
        try:
            origins = json.loads(self.ALLOWED_ORIGINS)
            if isinstance(origins, list):
                return origins
        except (json.JSONDecodeError, ValueError):
            pass

        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    @property
    def payfast_process_url(self) -> str:
        host = "sandbox.payfast.co.za" if self.PAYFAST_SANDBOX else "www.payfast.co.za"
        return f"https://{host}/eng/process"

    @property
    def payfast_validate_url(self) -> str:
        host = "sandbox.payfast.co.za" if self.PAYFAST_SANDBOX else "www.payfast.co.za"
        return f"https://{host}/eng/query/validate"


settings = Settings()
