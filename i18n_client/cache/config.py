"""
Cache Configuration

Module-specific settings for the local translation cache.
"""
import os

# =========================
# Backend Selection
# =========================

# Backend type: memory | file | redis
I18N_CACHE_BACKEND = os.getenv("I18N_CACHE_BACKEND", "memory")

# =========================
# Key Settings
# =========================

# Reserved prefix for every key this library writes
I18N_CACHE_KEY_PREFIX = os.getenv("I18N_CACHE_KEY_PREFIX", "i18n_")

# Fixed key for the supported-language list
LANGUAGES_CACHE_KEY = "languages"

# =========================
# File Backend
# =========================

I18N_CACHE_FILE = os.getenv("I18N_CACHE_FILE", os.path.join(os.path.expanduser("~"), ".i18n_client_cache.json"))

# =========================
# Redis Backend
# =========================

REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
REDIS_PORT = int(os.getenv("REDIS_PORT", "6379"))
REDIS_DB = int(os.getenv("REDIS_DB", "0"))
