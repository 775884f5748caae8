from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError, field_validator

from .errors import RequestValidationError

INVALID_JSON_MESSAGE = "Request body must be valid JSON"
NOT_AN_OBJECT_MESSAGE = "Request body must be a JSON object"
TEXTS_REQUIRED_MESSAGE = "texts array is required"
TEXTS_NOT_STRINGS_MESSAGE = "texts must be an array of strings"
TARGET_REQUIRED_MESSAGE = "targetLang is required"
TARGET_NOT_STRING_MESSAGE = "targetLang must be a string"


class TranslationRequest(BaseModel):
    """Inbound body: ``{texts, sourceLang?, targetLang}``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    texts: List[StrictStr] = Field(min_length=1)
    target_lang: str = Field(alias="targetLang", min_length=1, strict=True)
    source_lang: Optional[str] = Field(default=None, alias="sourceLang")

    @field_validator("target_lang", mode="before")
    @classmethod
    def _falsy_target_is_missing(cls, value):
        # any falsy scalar (null, "", false, 0) means "not supplied"
        if value is None or (isinstance(value, (str, bool, int, float)) and not value):
            raise ValueError(TARGET_REQUIRED_MESSAGE)
        return value

    @field_validator("source_lang", mode="before")
    @classmethod
    def _falsy_source_is_absent(cls, value):
        return value or None

    @classmethod
    def parse_body(cls, body: str | bytes | None) -> "TranslationRequest":
        """Deserialize and validate a raw JSON body.

        Checks are reported in a fixed order: JSON syntax, object shape,
        ``texts``, then ``targetLang``. The first failing one wins.

        Raises:
            RequestValidationError: with the client-facing message
        """
        if not body:
            raise RequestValidationError(INVALID_JSON_MESSAGE)
        try:
            return cls.model_validate_json(body)
        except ValidationError as e:
            raise RequestValidationError(_first_message(e.errors())) from None


def _first_message(errors: list) -> str:
    by_field: dict[str, list] = {}
    for err in errors:
        if err["type"] == "json_invalid":
            return INVALID_JSON_MESSAGE
        if err["type"] == "model_type" or not err["loc"]:
            return NOT_AN_OBJECT_MESSAGE
        by_field.setdefault(str(err["loc"][0]), []).append(err)

    if "texts" in by_field:
        # element-level errors carry an index after the field name
        if all(len(err["loc"]) > 1 for err in by_field["texts"]):
            return TEXTS_NOT_STRINGS_MESSAGE
        return TEXTS_REQUIRED_MESSAGE
    if "targetLang" in by_field:
        err = by_field["targetLang"][0]
        if err["type"] in ("missing", "value_error", "string_too_short"):
            return TARGET_REQUIRED_MESSAGE
        return TARGET_NOT_STRING_MESSAGE
    if "sourceLang" in by_field:
        return "sourceLang must be a string"
    return errors[0]["msg"]


class ProviderCredentials(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_key: str = Field(min_length=1)
    region: str = Field(min_length=1)


class TranslatedText(BaseModel):
    text: str


class TranslationResult(BaseModel):
    """Outbound success body, aligned one-to-one with the request texts."""

    translations: List[TranslatedText]
