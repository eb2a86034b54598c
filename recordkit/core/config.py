from pydantic import Field, AliasChoices, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Any, Optional


class Settings(BaseSettings):
    PROJECT_NAME: str = "recordkit"
    VERSION: str = "0.1.0"

    # Database
    POSTGRES_SERVER: Optional[str] = None
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "changethis"
    POSTGRES_DB: str = "records"
    POSTGRES_PORT: int = 5432
    SQLALCHEMY_DATABASE_URI: Optional[str] = Field(default=None, validate_default=True)
    SQL_ECHO: bool = Field(
        default=False,
        validation_alias=AliasChoices("SQL_ECHO", "SQLALCHEMY_ECHO"),
    )

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator("SQLALCHEMY_DATABASE_URI", mode="before")
    @classmethod
    def assemble_db_connection(cls, v: Optional[str], info) -> Any:
        if isinstance(v, str):
            return v
        # No explicit URI and no Postgres server: local SQLite file
        data = info.data if hasattr(info, "data") else {}
        if not data.get("POSTGRES_SERVER"):
            return "sqlite:///./data/records.db"

        return f"postgresql://{data.get('POSTGRES_USER')}:{data.get('POSTGRES_PASSWORD')}@{data.get('POSTGRES_SERVER')}:{data.get('POSTGRES_PORT')}/{data.get('POSTGRES_DB') or ''}"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


settings = Settings()
