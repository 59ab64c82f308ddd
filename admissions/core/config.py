"""Service settings: one pydantic-settings object with a section per collaborator."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./admissions.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None


class SecuritySettings(BaseModel):
    secret_key: str = Field(default="change-me", min_length=8)
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24


class ServiceSettings(BaseModel):
    """Backend data service (hosts the health function)."""

    base_url: Optional[str] = None
    public_key: Optional[str] = None


class HealthSettings(BaseModel):
    enabled: bool = True
    endpoint: str = "/functions/v1/health"
    timeout: float = 30.0
    max_retries: int = 3
    retry_delay: float = 5.0
    interval: float = 60.0


class GatewaySettings(BaseModel):
    base_url: str = "https://api.flutterwave.com"
    secret_key: Optional[str] = None
    timeout: float = 30.0
    currency: str = "NGN"


class PaymentSettings(BaseModel):
    max_retries: int = 3
    retry_delay: float = 5.0
    reference_prefix: str = "FTI"
    reference_policy: Literal["per_intent", "per_attempt"] = "per_intent"
    tuition_fee: int = 70000
    accommodation_fee: int = 30000
    confirmation_path: str = "/apply/confirmation"
    verify_max_retries: int = 3
    verify_backoff: float = 2.0


class BrandingSettings(BaseModel):
    title: str = "FolioTech Institute"
    logo: str = (
        "https://st2.depositphotos.com/4403291/7418/v/450/"
        "depositphotos_74189661-stock-illustration-online-shop-log.jpg"
    )


class SessionSettings(BaseModel):
    cookie_name: str = "admissions_profile"
    cookie_max_age: int = 60 * 60 * 24
    slot_key: str = "payment_pending"


class Settings(BaseSettings):
    """Read from the environment and `.env`; nested keys use `__` (e.g. `GATEWAY__SECRET_KEY`)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"
    project_name: str = "Admissions Service"
    api_prefix: str = "/api"
    site_url: str = "http://localhost:5173"

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    security: SecuritySettings = SecuritySettings()
    service: ServiceSettings = ServiceSettings()
    health: HealthSettings = HealthSettings()
    gateway: GatewaySettings = GatewaySettings()
    payments: PaymentSettings = PaymentSettings()
    branding: BrandingSettings = BrandingSettings()
    session: SessionSettings = SessionSettings()

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def secret_key(self) -> str:
        return self.security.secret_key

    @property
    def algorithm(self) -> str:
        return self.security.algorithm

    @property
    def access_token_expire_minutes(self) -> int:
        return self.security.access_token_expire_minutes

    @property
    def confirmation_url(self) -> str:
        return f"{self.site_url.rstrip('/')}{self.payments.confirmation_path}"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
