"""
Application configuration
Read from environment variables and .env; the LLM is any OpenAI-compatible API
"""
import os
from decimal import Decimal
from typing import Optional
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "VIPAT HMS"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Store backing database
    DATABASE_URL: str = "sqlite:///./hms.db"

    # Remote store; empty means the in-process store
    STORE_URL: str = ""
    STORE_TIMEOUT: float = 15.0

    # LLM (OpenAI-compatible API)
    OPENAI_API_KEY: Optional[str] = os.environ.get("OPENAI_API_KEY")
    OPENAI_BASE_URL: str = os.environ.get(
        "OPENAI_BASE_URL",
        "https://api.openai.com/v1"
    )
    LLM_MODEL: str = os.environ.get("LLM_MODEL", "gpt-4o-mini")
    LLM_TEMPERATURE: float = float(os.environ.get("LLM_TEMPERATURE", "0.3"))
    LLM_MAX_TOKENS: int = int(os.environ.get("LLM_MAX_TOKENS", "1000"))
    LLM_TIMEOUT: float = 30.0
    ENABLE_LLM: bool = os.environ.get("ENABLE_LLM", "true").lower() == "true"
    MAX_TOOL_ROUNDS: int = 5

    # Company details printed on documents
    COMPANY_NAME: str = "VIPAT HMS"
    COMPANY_LEGAL_NAME: str = "บริษัท วิพัฒน์โฮเทล.ดีเวลอปเมนท์ จำกัด"
    COMPANY_ADDRESS: str = "426 หมู่ที่9 ตำบลบึงกาฬ อำเภอเมืองบึงกาฬ จังหวัดบึงกาฬ 38000"
    COMPANY_PHONE: str = "080-6254859,042-492641"
    COMPANY_TAX_ID: str = "0-3855-59000-07-5"

    # Billing
    VAT_RATE: Decimal = Decimal("0.07")
    INVOICE_DUE_DAYS: int = 5

    model_config = ConfigDict(env_file=".env", case_sensitive=True)


# Global settings instance
settings = Settings()
