#!/usr/bin/env python3
from dataclasses import dataclass
import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ["true", "1", "yes"]


@dataclass
class Config:
    """Application configuration"""
    download_dir: str = "./downloaded_media"
    request_timeout: float = 30.0
    user_agent: str = "msl/0.1 (+https://github.com/msl-lang/msl)"
    debug: bool = False

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment variables (and .env)"""
        return cls(
            download_dir=os.getenv("MSL_DOWNLOAD_DIR", "./downloaded_media"),
            request_timeout=float(os.getenv("MSL_TIMEOUT", "30")),
            user_agent=os.getenv("MSL_USER_AGENT", cls.user_agent),
            debug=_env_bool("MSL_DEBUG"),
        )


config = Config.from_env()
