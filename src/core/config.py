from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from typing import List, Optional
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    # Environment setting
    ENVIRONMENT: str = Field(
        "development", description="Environment: development, staging, production"
    )

    # API settings
    API_PREFIX: str = Field("/api")
    DEBUG: bool = Field(False)
    ALLOWED_ORIGINS: str = Field("*")
    LOG_LEVEL: str = Field("INFO")

    # Document store settings
    DB_HOST: str = Field("localhost")
    DB_PORT: int = Field(5432)
    DB_USER: str = Field("")
    DB_PASSWORD: str = Field("")
    DB_NAME: str = Field("practice")
    DB_DRIVER: str = Field("postgresql+asyncpg")

    SQLITE_MODE: bool = False

    # Identity provider token settings
    SECRET_KEY: str = Field("change-me")
    ALGORITHM: str = Field("HS256")
    TOKEN_AUDIENCE: Optional[str] = Field(None)
    TOKEN_ISSUER: Optional[str] = Field(None)

    # Pagination
    DEFAULT_PAGE_SIZE: int = Field(10, gt=0)
    MAX_PAGE_SIZE: int = Field(100, gt=0)

    # Business constants
    COMMISSION_RATE: float = Field(0.20, description="Affiliate share of plan amount")
    INVOICE_TAX_RATE: float = Field(0.18, description="Default invoice tax rate")
    DOCTOR_PLAN_AMOUNT: int = Field(3500, description="Monthly doctor plan (INR)")
    HOSPITAL_PLAN_AMOUNT: int = Field(6000, description="Monthly hospital plan (INR)")
    TRIAL_PERIOD_DAYS: int = Field(7)
    DASHBOARD_WINDOW_DAYS: int = Field(30)

    # Rate limits
    DEFAULT_RATE_LIMIT: str = Field("100/minute")
    WRITE_RATE_LIMIT: str = Field("30/minute")

    # Uvicorn settings
    UVICORN_HOST: str = Field("0.0.0.0")
    UVICORN_PORT: int = Field(8000)
    WORKERS_COUNT: int = Field(1)
    RELOAD: bool = Field(False)

    @property
    def POSTGRESQL_DATABASE_URL(self) -> str:
        return (
            f"{self.DB_DRIVER}://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @property
    def SQLITE_DATABASE_URL(self) -> str:
        return f"sqlite+aiosqlite:///{self.DB_NAME}.db"

    @property
    def DATABASE_URL(self) -> str:
        return (
            self.SQLITE_DATABASE_URL
            if self.SQLITE_MODE
            else self.POSTGRESQL_DATABASE_URL
        )

    @property
    def ORIGINS(self) -> List[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin]

    @field_validator("LOG_LEVEL")
    def validate_log_level(cls, v: str) -> str:
        return v.upper()

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
