from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """
    Loads environment variables from the .env file.
    Missing Supabase credentials leave the client disabled instead of failing at import.
    """
    # Supabase settings
    SUPABASE_URL: str = ""
    SUPABASE_KEY: str = ""
    STORES_TABLE: str = "stores"
    PRODUCTS_TABLE: str = "products"

    # Listing cache, disabled when no URL is given
    REDIS_URL: Optional[str] = None
    CACHE_DEBUG: bool = False

    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]
    LOG_LEVEL: str = "INFO"
    PORT: int = 4000

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

# Create a single, importable instance of the settings
settings = Settings()
