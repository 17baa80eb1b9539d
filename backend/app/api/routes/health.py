from fastapi import APIRouter

from app.models.summary import (
    DEFAULT_LANGUAGE,
    LANGUAGES,
    LanguagesResponse,
    SummaryRequestConfig,
)

router = APIRouter()


@router.get("/health")
async def health():
    return {"status": "ok"}


@router.get("/languages", response_model=LanguagesResponse)
async def languages():
    """Languages the schema editor offers, and the default request config."""
    return LanguagesResponse(
        languages=LANGUAGES,
        default_config=SummaryRequestConfig(
            source_language=DEFAULT_LANGUAGE,
            target_language=DEFAULT_LANGUAGE,
        ),
    )
