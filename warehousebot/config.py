"""
Warehousebot Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


class Config:
    """Application configuration loaded from environment variables."""

    # Bot endpoint
    BOT_NAME: str = os.getenv("BOT_NAME", "john")
    BOT_BASE_URL: str = os.getenv("BOT_BASE_URL", "http://localhost:8080/api/bot")

    # Transport behaviour
    BOT_REQUEST_TIMEOUT_SECONDS: float = float(os.getenv("BOT_REQUEST_TIMEOUT_SECONDS", "5"))
    BOT_MAX_ATTEMPTS: int = int(os.getenv("BOT_MAX_ATTEMPTS", "3"))

    # Saved warehouse maps (JsonPersistence)
    SAVE_DIR: Path = Path(os.getenv("SAVE_DIR", "warehouses"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors if values are unusable."""
        if not cls.BOT_NAME.strip():
            raise ValueError("BOT_NAME must not be empty")

        if cls.BOT_REQUEST_TIMEOUT_SECONDS <= 0:
            raise ValueError(
                "BOT_REQUEST_TIMEOUT_SECONDS must be positive "
                f"(got {cls.BOT_REQUEST_TIMEOUT_SECONDS})"
            )

        if cls.BOT_MAX_ATTEMPTS < 1:
            raise ValueError(
                f"BOT_MAX_ATTEMPTS must be at least 1 (got {cls.BOT_MAX_ATTEMPTS})"
            )

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "Warehousebot Configuration:",
            f"  Bot: {cls.BOT_NAME}",
            f"  Endpoint: {cls.BOT_BASE_URL}",
            f"  Timeout: {cls.BOT_REQUEST_TIMEOUT_SECONDS}s",
            f"  Max Attempts: {cls.BOT_MAX_ATTEMPTS}",
            f"  Save Dir: {cls.SAVE_DIR}",
            f"  Log Level: {cls.LOG_LEVEL}",
        ]
        return "\n".join(lines)
