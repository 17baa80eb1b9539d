from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

LANGUAGES = [
    "English",
    "Spanish",
    "French",
    "German",
    "Chinese",
    "Japanese",
    "Korean",
    "Arabic",
]
DEFAULT_LANGUAGE = "English"


class SummaryRequestConfig(BaseModel):
    """Subject focus and language direction for a resume."""

    model_config = ConfigDict(populate_by_name=True)

    subjects: list[str] = Field(default_factory=list)
    source_language: str = Field(DEFAULT_LANGUAGE, alias="sourceLanguage")
    target_language: str = Field(DEFAULT_LANGUAGE, alias="targetLanguage")


class ProcessRequest(SummaryRequestConfig):
    texts: list[str] = Field(default_factory=list)

    @field_validator("texts", mode="before")
    @classmethod
    def non_list_texts_are_empty(cls, v: Any) -> Any:
        # Anything that isn't an array is rejected later as "no texts"
        if not isinstance(v, list):
            return []
        return v

    @field_validator("subjects", mode="before")
    @classmethod
    def null_subjects_are_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class ProcessResponse(BaseModel):
    resume: str


class LanguagesResponse(BaseModel):
    languages: list[str]
    default_config: SummaryRequestConfig
