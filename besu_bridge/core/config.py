from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    PROJECT_NAME: str = "Besu Value Bridge API"
    SERVICE_NAME: str = "besu-api"
    API_V1_STR: str = "/api/v1"
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    LOG_LEVEL: str = "INFO"

    # Chain
    BESU_RPC_URL: str = "http://localhost:8545"
    CONTRACT_ADDRESS: str = ""
    PRIVATE_KEY: str = ""
    CONTRACT_ABI_PATH: Optional[str] = None
    GAS_LIMIT: int = 300000
    GAS_PRICE: int = 0  # Besu free-gas networks
    RPC_TIMEOUT: float = 10.0

    # Database: DATABASE_URL wins over the discrete parts
    DATABASE_URL: str = ""
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASS: str = ""
    DB_NAME: str = "postgres"

    # This configures Pydantic to read variables from the ".env" file
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL

        url = URL.create(
            "postgresql+psycopg2",
            username=self.DB_USER,
            password=self.DB_PASS or None,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
            query={"sslmode": "disable"},
        )
        return url.render_as_string(hide_password=False)


settings = Settings()
