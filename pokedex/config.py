import os
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from a .env file at the project root, if present
env_path = os.path.join(os.path.dirname(os.path.dirname(__file__)), '.env')
load_dotenv(dotenv_path=env_path)


class Settings(BaseSettings):
    """Application settings, read once at startup."""

    model_config = SettingsConfigDict(env_file_encoding='utf-8')

    # MongoDB connection
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_db: str = "pokedex"

    # Page size used when a list request doesn't send a limit
    default_limit: int = 7

    # Outbound HTTP (seed only)
    pokeapi_base_url: str = "https://pokeapi.co/api/v2"
    http_timeout: float = 5.0
    seed_limit: int = 650

    log_level: str = "INFO"


# Single instance imported by the rest of the app
settings = Settings()
