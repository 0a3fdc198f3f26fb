"""Configuration management for the Akismet client."""

import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional
from dotenv import load_dotenv


VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass(frozen=True)
class AkismetConfig:
    """Credentials and settings shared by every call of the convenience API."""

    # API Keys
    api_key: str
    app_url: str

    # User-Agent
    app_name: Optional[str] = None
    app_version: Optional[str] = None

    # Transport
    timeout: float = 30

    # Logging
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_path: str = ".env") -> "AkismetConfig":
        """
        Load configuration from .env file and environment variables.

        Args:
            env_path: Path to .env file (default: ".env")

        Returns:
            AkismetConfig object with loaded settings
        """
        # Try to find .env file - check current dir, then project root
        env_file = None
        if Path(env_path).exists():
            env_file = env_path
        else:
            project_root = Path(__file__).parent.parent.parent
            env_candidate = project_root / env_path
            if env_candidate.exists():
                env_file = str(env_candidate)

        if env_file:
            load_dotenv(env_file)

        return cls(
            api_key=os.getenv("AKISMET_API_KEY", ""),
            app_url=os.getenv("AKISMET_APP_URL", ""),
            app_name=os.getenv("AKISMET_APP_NAME") or None,
            app_version=os.getenv("AKISMET_APP_VERSION") or None,
            timeout=float(os.getenv("AKISMET_TIMEOUT", "30")),
            log_level=os.getenv("LOG_LEVEL", "INFO")
        )

    def validate(self) -> List[str]:
        """
        Validate configuration and return list of errors.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []

        if not self.api_key:
            errors.append("AKISMET_API_KEY not set. Get a key at https://akismet.com")

        if not self.app_url:
            errors.append("AKISMET_APP_URL not set. Use the home page URL of your site")

        if self.log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid log level: {self.log_level}. "
                f"Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )

        if self.timeout <= 0:
            errors.append(
                f"Invalid timeout: {self.timeout}. "
                f"Must be greater than 0"
            )

        # Optional, but Akismet asks for it in the User-Agent
        if not self.app_name:
            logger = logging.getLogger(__name__)
            logger.warning(
                "AKISMET_APP_NAME not set. User-Agent will only name the client library."
            )

        return errors

    def setup_logging(self):
        """Configure logging based on config settings."""
        logging.basicConfig(
            level=getattr(logging, self.log_level.upper()),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
