import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

@dataclass
class Settings:
    # API settings
    api_host: str = os.getenv("API_HOST", "localhost")
    api_port: int = int(os.getenv("API_PORT", "8080"))
    api_base_url: str = os.getenv(
        "LIBRARY_API_URL",
        f"http://{os.getenv('API_HOST', 'localhost')}:{os.getenv('API_PORT', '8080')}"
    )
    request_timeout: float = float(os.getenv("LIBRARY_API_TIMEOUT", "10"))

    # Inventory settings
    seed_books: bool = os.getenv("LIBRARY_SEED_BOOKS", "True").lower() in ("true", "1", "yes")

    # Application settings
    app_name: str = os.getenv("APP_NAME", "Book Inventory API")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # CLI settings: plain | json | rich
    cli_output: str = os.getenv("LIB_CLI_OUTPUT", "plain").lower()


settings = Settings()
