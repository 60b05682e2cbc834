"""
Pydantic models for translation API payloads and client results.

Python attribute names are snake_case; aliases carry the camelCase names used
on the wire. Both spellings are accepted on input.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Literal, Optional

JobStatusType = Literal["pending", "processing", "completed", "failed", "error"]


class WireModel(BaseModel):
    """Base model accepting field names or camelCase aliases."""
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        """Dump with camelCase keys, dropping unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class TranslationResult(WireModel):
    """Outcome of a single translation."""
    text: str = Field(..., description="Translated text, or the original text when not translated")
    translated: bool = Field(..., description="True when `text` is a translation")
    from_cache: Optional[bool] = Field(None, alias="fromCache", description="Served from the local cache")
    error: Optional[str] = Field(None, description="Failure message; `text` falls back to the input")


class TranslationItem(WireModel):
    """One entry of a batch translation request."""
    id: Optional[str] = Field(None, description="Caller identifier (generated if not provided)")
    text: str = Field(..., description="Text to translate")
    source_language: Optional[str] = Field(None, alias="sourceLanguage")
    target_language: Optional[str] = Field(None, alias="targetLanguage")


class BatchItemResult(WireModel):
    """Per-item result of a batch translation."""
    id: Optional[str] = None
    text: str
    translated: bool = False
    from_cache: Optional[bool] = Field(None, alias="fromCache")
    error: Optional[str] = None


class BatchResult(WireModel):
    """
    Result of a batch translation.

    Either `results` (aligned to the input order) or an async job handle
    (`job_id` + `status`).
    """
    results: Optional[List[BatchItemResult]] = None
    job_id: Optional[str] = Field(None, alias="jobId")
    status: Optional[str] = None
    error: Optional[str] = None


class JobStatus(WireModel):
    """Status of an async batch translation job."""
    job_id: Optional[str] = Field(None, alias="jobId")
    status: JobStatusType
    progress: Optional[float] = None
    results: Optional[List[BatchItemResult]] = None
    error: Optional[str] = None


class Language(WireModel):
    """A language supported by the translation API."""
    code: str
    name: str
    native_name: Optional[str] = Field(None, alias="nativeName")
    flag: Optional[str] = None
    rtl: Optional[bool] = None
