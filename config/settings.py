"""Application settings loaded from .env file"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional, Literal

LOG_LEVEL = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

class Settings(BaseSettings):
    """
    Application configuration loaded from environment variables (.env)
    """
    # Logging configuration
    log_level: LOG_LEVEL = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL (default: INFO)"
    )
    log_format: str = Field(
        default="%(asctime)s | %(levelname)-8s | %(module)s:%(funcName)s:%(lineno)d - %(message)s",
        description="Default log format (can be customized if needed)"
    )
    log_date_format: str = Field(
        default="%Y-%m-%d %H:%M:%S",
        description="Date/time format for logs"
    )
    log_to_file: bool = Field(
        default=False,
        description="If true, enable logging to a file"
    )
    log_file_path: str = Field(
        default="logs/app.log",
        description="Path to log file"
    )
    log_file_rotation: str = Field(
        default="midnight",
        description="Log file rotation interval"
    )
    log_file_retention: int = Field(
        default=7,
        ge=1,
        description="Number of days to retain log files"
    )

    # Classifier models
    use_model: bool = Field(
        default=True,
        description="If false, skip the transformer classifiers and always use the keyword engine"
    )
    sentiment_model_name: str = Field(
        default="distilbert-base-uncased-finetuned-sst-2-english",
        description="Hugging Face model for binary sentiment (POSITIVE/NEGATIVE labels)"
    )
    emotion_model_name: str = Field(
        default="j-hartmann/emotion-english-distilroberta-base",
        description="Hugging Face model for multi-class emotion classification"
    )
    sentiment_top_k: int = Field(
        default=2,
        ge=1,
        description="Number of sentiment labels requested from the sentiment model"
    )
    emotion_top_k: int = Field(
        default=5,
        ge=1,
        description="Number of emotion labels requested from the emotion model"
    )

    # Storage
    storage_dir: str = Field(
        default="data/storage",
        description="Directory holding the JSON records (cache, feedback log, message log)"
    )
    tenant_id: str = Field(
        default="default",
        description="Company/tenant namespace appended to every storage key"
    )
    cache_max_entries: Optional[int] = Field(
        default=None,
        ge=1,
        description="If set, evict the oldest cached analyses beyond this size (unbounded when unset)"
    )

    # Prioritization
    max_interactions: int = Field(
        default=10,
        ge=1,
        description="Interaction count at which the interaction signal saturates"
    )
    verified_confidence: float = Field(
        default=0.95,
        ge=0.0,
        le=1.0,
        description="Confidence stamped on analyses corrected or confirmed by a human"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()
