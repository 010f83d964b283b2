# pos_register/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, List
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    # Backend serving product lookups and purchases
    API_BASE_URL: str = "http://localhost:8000"
    PRODUCT_LOOKUP_PATH: str = "/product"
    PURCHASE_PATH: str = "/purchase"
    HTTP_TIMEOUT_SECONDS: float = 10.0

    # Some backends answer an unknown code with 404 instead of null
    LOOKUP_NOT_FOUND_ON_404: bool = False

    # Station context attached to every purchase
    EMPLOYEE_CODE: str = "9999999999"
    STORE_CODE: str = "30"
    REGISTER_NO: str = "90"

    # Register API
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

settings = Settings()
