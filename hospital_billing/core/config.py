# hospital_billing/core/config.py
import os
from typing import List, Optional
from pydantic import BaseModel
from dotenv import load_dotenv
from urllib.parse import quote_plus

load_dotenv()


def _split_csv(value: str) -> List[str]:
    return [v.strip() for v in (value or "").split(",") if v.strip()]


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


class Settings(BaseModel):
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "Hospital Billing")
    API_V1_STR: str = os.getenv("API_V1_STR", "/api")

    # CORS is fully open unless CORS_ORIGINS narrows it
    BACKEND_CORS_ORIGINS: List[str] = _split_csv(os.getenv("CORS_ORIGINS", "*"))

    # ---------- MySQL ----------
    MYSQL_HOST: str = os.getenv("MYSQL_HOST", "localhost")
    MYSQL_PORT: int = int(os.getenv("MYSQL_PORT", "3306"))
    MYSQL_USER: str = os.getenv("MYSQL_USER", "root")
    MYSQL_PASSWORD: str = os.getenv("MYSQL_PASSWORD", "")
    MYSQL_DB: str = os.getenv("MYSQL_DB", "hospital_billing")
    DB_DRIVER: str = os.getenv("DB_DRIVER", "pymysql")

    # Full URL override (e.g. sqlite:// for local runs and tests)
    DATABASE_URL: Optional[str] = os.getenv("DATABASE_URL") or None
    DB_ECHO: bool = _flag("DB_ECHO")

    # ---------- Logging / errors ----------
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    # 500 responses carry the driver message when enabled
    EXPOSE_DB_ERRORS: bool = _flag("EXPOSE_DB_ERRORS", "true")

    # ---------- Billing flags ----------
    BILLING_NET_FLOOR_ZERO: bool = _flag("BILLING_NET_FLOOR_ZERO")

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        auth = quote_plus(self.MYSQL_USER)
        if self.MYSQL_PASSWORD:
            auth = f"{auth}:{quote_plus(self.MYSQL_PASSWORD)}"
        return (f"mysql+{self.DB_DRIVER}://{auth}"
                f"@{self.MYSQL_HOST}:{self.MYSQL_PORT}/{self.MYSQL_DB}"
                "?charset=utf8mb4")


settings = Settings()
