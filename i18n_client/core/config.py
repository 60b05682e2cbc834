"""
HTTP Client Configuration

Module-specific settings for the translation API transport.
"""
import os

# =========================
# Connection Settings
# =========================

# HTTP client timeout in seconds
I18N_CONNECTION_TIMEOUT = int(os.getenv("I18N_CONNECTION_TIMEOUT", "30"))

# Connection pool limit (total and per host)
I18N_CONNECTION_POOL_LIMIT = int(os.getenv("I18N_CONNECTION_POOL_LIMIT", "20"))

# =========================
# Request Headers
# =========================

API_KEY_HEADER = "X-API-Key"
