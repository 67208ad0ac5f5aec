"""
EasyBuild Content API - Shared Schemas
========================================

What:  Value types and response models shared by every content type:
       - LocalizedText: the {en, de, al} text block used by all localized fields
       - Envelope: the uniform {success, message, data, error} response body
       - serialize_document(): MongoDB document → JSON-safe dict
       - HealthResponse: body of GET /health
"""

from typing import Any, Dict, List, Optional

from bson import ObjectId
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

# Language codes every localized field must provide
LOCALES = ("en", "de", "al")


def missing_locales(value: Any) -> List[str]:
    """
    Returns the locale codes that are absent or blank in `value`.

    A non-mapping value is missing every locale.
    """
    if not isinstance(value, dict):
        return list(LOCALES)
    missing = []
    for code in LOCALES:
        text = value.get(code)
        if not isinstance(text, str) or not text.strip():
            missing.append(code)
    return missing


class LocalizedText(BaseModel):
    """
    Text in every supported language.

    All three locales are required together and stored whitespace-trimmed:
        {"en": "Our Team", "de": "Unser Team", "al": "Ekipi Ynë"}
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    en: str
    de: str
    al: str

    @model_validator(mode="before")
    @classmethod
    def require_all_locales(cls, data: Any) -> Any:
        missing = missing_locales(data)
        if missing:
            raise ValueError(f"missing text for locale(s): {', '.join(missing)}")
        return data


class CamelModel(BaseModel):
    """Base for stored payloads: snake_case in Python, camelCase in MongoDB and JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class Envelope(BaseModel):
    """
    Uniform response body for content and error responses.

    Example:
        {"success": true, "message": "Banner created successfully", "data": {...}}
        {"success": false, "message": "No active banner found", "error": "not_found"}
    """

    success: bool
    message: Optional[str] = None
    data: Optional[Any] = None
    error: Optional[str] = None

    def to_content(self) -> Dict[str, Any]:
        """JSON-safe dict with unset optional members left out."""
        return jsonable_encoder(
            self.model_dump(exclude_none=True),
            custom_encoder={ObjectId: str},
        )


def serialize_document(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Converts a MongoDB document into a JSON-safe dict.

    `_id` and any nested ObjectId become hex strings; datetimes become
    ISO 8601 strings (jsonable_encoder default).
    """
    if document is None:
        return None
    return jsonable_encoder(document, custom_encoder={ObjectId: str})


class HealthResponse(BaseModel):
    """Body of GET /health."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected, not_configured")
    uptime_seconds: float = Field(description="Seconds since service started")
