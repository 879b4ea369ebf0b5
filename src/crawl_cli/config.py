# src/crawl_cli/config.py
from typing import Optional
from pydantic_settings import BaseSettings
from crawl_core import __version__

class Settings(BaseSettings):
    # Dataset host used when a job does not name one
    hostname: str = "data.commoncrawl.org"
    # Transport
    http_timeout: Optional[float] = 60.0  # seconds; None disables the timeout
    user_agent: str = f"crawl-stream/{__version__}"
    # Logging
    log_level: str = "INFO"
    # Checkpoints (resume offsets) for named runs
    checkpoint_dir: str = ".checkpoints"
    checkpoint_every: int = 1000  # outputs between checkpoint writes

    class Config:
        env_prefix = "CRAWL_"
        extra = "ignore"

settings = Settings()
