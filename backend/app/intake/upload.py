import logging
import mimetypes
import uuid
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import httpx

from app.intake.api_client import ApiError, ResumeApiClient
from app.models.extraction import ExtractedDocument
from app.models.summary import SummaryRequestConfig

logger = logging.getLogger(__name__)

ACCEPTED_TYPE = "application/pdf"


class IntakeError(Exception):
    pass


class UploadStatus(str, Enum):
    IDLE = "idle"
    UPLOADING = "uploading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class SelectedFile:
    name: str
    content: bytes
    content_type: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    @classmethod
    def from_path(cls, path: Path) -> "SelectedFile":
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        return cls(name=path.name, content=path.read_bytes(), content_type=content_type)


@dataclass
class UploadState:
    file: SelectedFile
    status: UploadStatus = UploadStatus.IDLE
    error: str | None = None


class UploadIntake:
    """
    Client-side view model for uploading lecture notes.

    Files are accepted only if they are PDFs, uploaded one at a time, and
    tracked by file id. Only successful extractions are kept for
    summarization.
    """

    def __init__(self, api: ResumeApiClient):
        self.api = api
        self.uploads: dict[str, UploadState] = {}
        self.documents: dict[str, ExtractedDocument] = {}

    @staticmethod
    def filter_accepted(files: list[SelectedFile]) -> list[SelectedFile]:
        return [f for f in files if f.content_type == ACCEPTED_TYPE]

    def select(self, files: list[SelectedFile]) -> list[SelectedFile]:
        """Register the PDFs among ``files`` and return them."""
        accepted = self.filter_accepted(files)
        if not accepted:
            raise IntakeError("Please upload PDF files only")

        skipped = len(files) - len(accepted)
        if skipped:
            logger.info("Skipped %d non-PDF file(s)", skipped)

        for f in accepted:
            self.uploads[f.id] = UploadState(file=f)
        return accepted

    def upload(self, selected: SelectedFile) -> UploadState:
        state = self.uploads.setdefault(selected.id, UploadState(file=selected))
        state.status = UploadStatus.UPLOADING
        state.error = None
        logger.info("Processing file: %s", selected.name)

        try:
            document = self.api.extract(selected.name, selected.content, selected.content_type)
        except (ApiError, httpx.HTTPError) as e:
            logger.error("Error processing file %s: %s", selected.name, e)
            state.status = UploadStatus.ERROR
            state.error = str(e) or "Failed to process file"
            return state

        self.documents[selected.id] = document
        state.status = UploadStatus.SUCCESS
        return state

    def add_files(self, files: list[SelectedFile]) -> list[UploadState]:
        """Select and upload files sequentially, each awaited before the next."""
        return [self.upload(f) for f in self.select(files)]

    @property
    def extracted(self) -> list[ExtractedDocument]:
        return list(self.documents.values())

    def can_summarize(self, config: SummaryRequestConfig) -> bool:
        return bool(self.documents) and bool(config.subjects)

    def summarize(self, config: SummaryRequestConfig) -> str:
        if not self.documents:
            raise IntakeError("No extracted documents to summarize")
        return self.api.process([doc.text for doc in self.extracted], config)
