import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.models.extraction import ErrorResponse
from app.models.summary import ProcessRequest, ProcessResponse
from app.services.summary_service import SummaryService, get_summary_service

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


@router.post("/process", response_model=ProcessResponse, responses=ERROR_RESPONSES)
async def process_texts(
    request: ProcessRequest,
    summary_service: SummaryService = Depends(get_summary_service),
):
    """Generate a structured resume from extracted lecture texts."""
    if not request.texts:
        logger.error("Invalid texts array in process request")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No texts provided for processing",
        )

    logger.info(
        "Processing %d texts, subjects=%s, %s -> %s",
        len(request.texts),
        request.subjects,
        request.source_language,
        request.target_language,
    )

    try:
        resume = await summary_service.generate_resume(request.texts, request)
    except Exception as e:
        logger.error(
            "Resume generation failed: name=%s message=%s cause=%r",
            type(e).__name__,
            e,
            e.__cause__,
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error processing with Groq: {e}",
        )

    return ProcessResponse(resume=resume)
