"""Event store settings."""

from pydantic_settings import BaseSettings


class EventStoreSettings(BaseSettings):
    """Event store settings loaded from environment variables.

    All settings can be overridden via environment variables with the
    ANALYTICS_STORE_ prefix, e.g. ``ANALYTICS_STORE_MAX_EVENTS=500``.
    The encryption key should come from the environment or a secret store,
    never from a committed .env file.
    """

    # Blob naming / encryption
    filename_suffix: str = ".evt"
    encryption_key: str = ""

    # Admission policy
    logging_enabled: bool = True
    max_events: int = 1000

    # Restrict fetch-all / delete-all / capacity counting to blobs with our suffix
    filter_by_suffix: bool = False

    # Blob directory: "local" | "memory" | "s3"
    backend: str = "local"
    root_dir: str = "data/events"

    # S3 backend
    s3_bucket: str = ""
    s3_prefix: str = "events/"
    aws_region: str = "ap-northeast-1"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    class Config:
        env_prefix = "ANALYTICS_STORE_"
        env_file = ".env"
