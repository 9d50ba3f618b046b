from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy import URL
from typing import Optional

class Settings(BaseSettings):
    PROJECT_NAME: str = "Recipe Manager"

    # Database
    DATABASE_URL: str = "sqlite:///./recipes.db"

    # Server coordinates. When DB_HOST is set these win over DATABASE_URL.
    DB_DRIVER: str = "mysql+pymysql"
    DB_HOST: Optional[str] = None
    DB_PORT: int = 3306
    DB_SCHEMA: str = "recipes"
    DB_USER: str = "recipes"
    DB_PASSWORD: str = "recipes"

    # Logging
    LOGGING_CONFIG: str = "logging.ini"

    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env")

    @property
    def database_url(self) -> "str | URL":
        if self.DB_HOST:
            return URL.create(
                drivername=self.DB_DRIVER,
                username=self.DB_USER,
                password=self.DB_PASSWORD,
                host=self.DB_HOST,
                port=self.DB_PORT,
                database=self.DB_SCHEMA,
            )
        return self.DATABASE_URL

settings = Settings()
