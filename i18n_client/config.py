"""
Global Configuration

Shared settings used across all modules.
Module-specific settings are in each module's config.py file.

All settings can be overridden via environment variables or a .env file.
"""
import os
from dataclasses import dataclass, field
from typing import Optional, Dict, Any

from dotenv import load_dotenv

# Load .env file before any os.getenv() calls
load_dotenv()

from .core.config import I18N_CONNECTION_TIMEOUT, I18N_CONNECTION_POOL_LIMIT


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# =========================
# API Configuration
# =========================

I18N_API_URL = os.getenv("I18N_API_URL", "https://api.yourdomain.com")
I18N_API_KEY = os.getenv("I18N_API_KEY")

# =========================
# Language Defaults
# =========================

I18N_DEFAULT_SOURCE_LANGUAGE = os.getenv("I18N_DEFAULT_SOURCE_LANGUAGE", "en")
I18N_DEFAULT_TARGET_LANGUAGE = os.getenv("I18N_DEFAULT_TARGET_LANGUAGE") or None

# =========================
# Local Cache
# =========================

I18N_USE_LOCAL_CACHE = _env_bool("I18N_USE_LOCAL_CACHE", "true")
I18N_CACHE_TTL = int(os.getenv("I18N_CACHE_TTL", "86400"))  # 24 hours

# =========================
# Diagnostics
# =========================

I18N_DEBUG = _env_bool("I18N_DEBUG", "false")


@dataclass
class I18nClientConfig:
    """
    Configuration for an I18nClient instance.

    Values passed explicitly win over configured defaults, which win over the
    built-in defaults below.

    Example:
        config = I18nClientConfig(
            api_key="secret",
            default_target_language="es",
        )
        client = I18nClient(config)
    """
    api_url: str = "https://api.yourdomain.com"
    api_key: Optional[str] = None

    default_source_language: str = "en"
    default_target_language: Optional[str] = None

    # Cache settings
    use_local_cache: bool = True
    cache_ttl: int = 86400

    # Connection settings
    timeout: int = 30
    pool_limit: int = 20

    debug: bool = False

    extra_headers: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_env(cls, **overrides) -> "I18nClientConfig":
        """Build a config from environment-backed module settings."""
        values = {
            "api_url": I18N_API_URL,
            "api_key": I18N_API_KEY,
            "default_source_language": I18N_DEFAULT_SOURCE_LANGUAGE,
            "default_target_language": I18N_DEFAULT_TARGET_LANGUAGE,
            "use_local_cache": I18N_USE_LOCAL_CACHE,
            "cache_ttl": I18N_CACHE_TTL,
            "timeout": I18N_CONNECTION_TIMEOUT,
            "pool_limit": I18N_CONNECTION_POOL_LIMIT,
            "debug": I18N_DEBUG,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary (API key masked)."""
        return {
            "api_url": self.api_url,
            "api_key": "***" if self.api_key else None,
            "default_source_language": self.default_source_language,
            "default_target_language": self.default_target_language,
            "use_local_cache": self.use_local_cache,
            "cache_ttl": self.cache_ttl,
            "timeout": self.timeout,
            "pool_limit": self.pool_limit,
            "debug": self.debug,
        }
