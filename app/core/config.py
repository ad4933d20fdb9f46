from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # Environment
    ENVIRONMENT: str = "development"

    # API
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "SEC 8-K Digest"

    # SEC EDGAR
    # SEC fair-access policy requires a contact in the User-Agent header.
    # UA_EMAIL is accepted for deployments configured before the rename.
    SEC_USER_AGENT: str = Field(
        "contact@example.com",
        validation_alias=AliasChoices("SEC_USER_AGENT", "UA_EMAIL"),
    )
    SEC_DATA_URL: str = "https://data.sec.gov"
    SEC_ARCHIVE_URL: str = "https://www.sec.gov/Archives/edgar/data"
    SEC_TICKER_MAP_URL: str = "https://www.sec.gov/files/company_tickers.json"
    SEC_REQUEST_TIMEOUT: float = 30.0
    SEC_RATE_LIMIT_DELAY: float = 0.1  # 10 requests/second

    # Digest defaults
    DEFAULT_SYMBOL: str = "AAPL"
    DEFAULT_DAYS: int = 1
    MAX_DAYS: int = 30

    # Logging settings
    LOG_LEVEL: str = "INFO"

    @property
    def API_CORS_ORIGINS(self) -> List[str]:
        """Dynamic CORS configuration based on environment"""
        if self.ENVIRONMENT == "development":
            return [
                "http://localhost:3000",
                "http://localhost:8000",
                "http://localhost:8080",
            ]
        return []

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


# Create settings instance
settings = Settings()
