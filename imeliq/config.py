"""Environment configuration.

Values come from the process environment. A ``.env`` file fills in any
variable that is not already set, so systemd units and local shells behave
the same.
"""

import logging
import os
import secrets
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from imeliq.errors import ConfigurationError

logger = logging.getLogger("Imeliq.config")

ENV_FILE_PATHS = [
    Path("/opt/imeliq/.env"),
    Path(__file__).parent.parent / ".env",
]

DEFAULT_DATABASE_URL = "postgresql+asyncpg://postgres:postgres@db:5432/imeliq"


def load_env_file(paths: Optional[list[Path]] = None) -> int:
    """Load the first readable .env file. Returns the number of variables set."""
    for env_file in paths if paths is not None else ENV_FILE_PATHS:
        if not (env_file.exists() and env_file.is_file()):
            continue
        loaded_count = 0
        with open(env_file, "r") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip()
                if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
                    value = value[1:-1]
                if key and value and key not in os.environ:
                    os.environ[key] = value
                    loaded_count += 1
        if loaded_count:
            logger.info(f"Loaded {loaded_count} environment variables from {env_file}")
        return loaded_count
    return 0


def _env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


class Settings(BaseModel):
    """Validated process-wide configuration."""
    
    debug: bool = False
    database_url: str = ""
    admin_password: Optional[str] = None
    session_secret: Optional[str] = None
    api_key: Optional[str] = None
    
    @classmethod
    def from_env(cls) -> "Settings":
        debug = (_env("APP_DEBUG") or "false").lower() == "true"
        # The local dev database is only a fallback in debug mode
        default_url = DEFAULT_DATABASE_URL if debug else ""
        return cls(
            debug=debug,
            database_url=_env("DATABASE_URL") or default_url,
            admin_password=_env("IMELIQ_ADMIN_PASSWORD"),
            session_secret=_env("IMELIQ_SESSION_SECRET"),
            api_key=_env("IMELIQ_API_KEY"),
        )
    
    def validated(self) -> "Settings":
        """Check required values, failing closed. Returns the usable settings."""
        if not self.database_url:
            raise ConfigurationError("DATABASE_URL is not configured")
        
        settings = self
        if not self.session_secret:
            if not self.debug:
                raise ConfigurationError("IMELIQ_SESSION_SECRET is not configured")
            logger.warning("IMELIQ_SESSION_SECRET not set, using a per-process secret (debug only)")
            settings = self.model_copy(update={"session_secret": secrets.token_hex(32)})
        
        if not self.admin_password:
            logger.warning("IMELIQ_ADMIN_PASSWORD not set, admin login is disabled")
        if not self.api_key:
            logger.debug("IMELIQ_API_KEY not set, bearer access to admin data is disabled")
        
        return settings
