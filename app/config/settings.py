import os
from pydantic_settings import BaseSettings
from functools import lru_cache

class Settings(BaseSettings):
    # Application Settings
    APP_NAME: str = "Sales Reports API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = os.getenv("DEBUG", False)

    # MongoDB Settings
    MONGO_URI: str = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    MONGO_DB_NAME: str = os.getenv("MONGO_DB_NAME", "apre")
    MONGO_TIMEOUT_MS: int = os.getenv("MONGO_TIMEOUT_MS", 5000)
    SALES_COLLECTION: str = "sales"

    # API Settings
    API_PREFIX: str = "/api"
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "http://localhost:4200")

    # Report view
    API_BASE_URL: str = os.getenv("API_BASE_URL", "http://localhost:3000/api")

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

@lru_cache()
def get_settings():
    return Settings()

settings = get_settings()
