import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from app.config import Settings, get_settings
from app.models.extraction import ErrorResponse, ExtractResponse
from app.services.extraction_service import extract_document
from app.services.parsing_service import ParsingService, get_parsing_service

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


@router.post("/extract", response_model=ExtractResponse, responses=ERROR_RESPONSES)
async def extract_text(
    file: UploadFile | None = File(None),
    parser: ParsingService = Depends(get_parsing_service),
    settings: Settings = Depends(get_settings),
):
    """Extract page-labelled text from a single uploaded document."""
    if file is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file provided",
        )

    filename = file.filename or "untitled"
    try:
        content = await file.read()
    except Exception as e:
        logger.error("Could not read upload %s: %s", filename, e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error handling request",
        )

    logger.info("Received %s (%d bytes, %s)", filename, len(content), file.content_type)

    try:
        text = await extract_document(filename, content, settings.uploads_dir, parser)
    except Exception as e:
        logger.error("Error processing %s: %s", filename, e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error processing file",
        )

    return ExtractResponse(text=text, filename=filename)
