from pydantic_settings import BaseSettings
from pydantic import Field


class Config(BaseSettings):
    # Database Configuration
    db_url: str = Field(
        default="sqlite+aiosqlite:///./expense_tracker.db", alias="DB_URL"
    )
    db_echo: bool = Field(default=False, alias="DB_ECHO")
    create_tables_on_startup: bool = Field(
        default=True, alias="CREATE_TABLES_ON_STARTUP"
    )

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    environment: str = Field(default="development", alias="ENVIRONMENT")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    # Path to .env file (for loading env vars)
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


# Instantiate the settings
config = Config()
