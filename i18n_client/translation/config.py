"""
Translation Configuration

Endpoint paths and fallback messages for the translation API.
"""

# =========================
# Endpoints
# =========================

TRANSLATE_PATH = "/api/translate"
BATCH_TRANSLATE_PATH = "/api/translate/batch"
JOB_STATUS_PATH = "/api/translate/status/{job_id}"
LANGUAGES_PATH = "/api/languages"

# =========================
# Fallback Error Messages
# =========================

TRANSLATION_FAILED_MESSAGE = "Translation failed"
JOB_STATUS_FAILED_MESSAGE = "Failed to check job status"
LANGUAGES_FAILED_MESSAGE = "Failed to fetch languages"

# =========================
# Batch Settings
# =========================

# Status returned to callers when the server accepted an async batch job
ASYNC_JOB_STATUS = "processing"
