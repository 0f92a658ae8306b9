from pydantic_settings import BaseSettings
from pathlib import Path

# Get the project root directory (parent of studytrack folder)
PROJECT_ROOT = Path(__file__).parent.parent

class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""
    database_url: str = f"sqlite:///{PROJECT_ROOT / 'study_tracker.db'}"

    # Logging for the persistence and service layers
    log_level: str = "WARNING"

    # Motivation label shown on the progress report until the user picks one
    default_motivation: str = "Neutral"

    class Config:
        env_file = str(PROJECT_ROOT / ".env")

settings = Settings()
