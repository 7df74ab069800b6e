"""
Application settings for the Disaster Risk Early Warning backend.
"""

import os
from typing import List
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings:
    # Database configuration
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./early_warning.db")
    sql_echo: bool = os.getenv("SQL_ECHO", "false").lower() in ("1", "true")

    # API server configuration
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    cors_origins_raw: str = os.getenv("CORS_ORIGINS", "*")

    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Length of the window covered by a risk report
    risk_report_period_days: int = int(os.getenv("RISK_REPORT_PERIOD_DAYS", "7"))

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins_raw.split(",") if origin.strip()]

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


settings = Settings()
