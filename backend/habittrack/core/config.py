"""
Application configuration and environment variables
"""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Settings:
    """Application settings loaded from environment variables"""

    # Storage
    DATA_FILE: str = os.getenv("HABITTRACK_DATA_FILE", "data/habits.json")
    EXPORT_DIR: str = os.getenv("HABITTRACK_EXPORT_DIR", "exports")

    # Calendar
    TIMEZONE: str = os.getenv("HABITTRACK_TIMEZONE", "UTC")
    HEATMAP_WEEKS: int = int(os.getenv("HABITTRACK_HEATMAP_WEEKS", "16"))
    WEEK_START: str = os.getenv("HABITTRACK_WEEK_START", "sunday").lower()

    # Logging
    LOG_LEVEL: str = os.getenv("HABITTRACK_LOG_LEVEL", "INFO").upper()


# Create a global settings instance
settings = Settings()
