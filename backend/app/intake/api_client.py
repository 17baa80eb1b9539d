"""HTTP client for the extract and process endpoints."""

import logging

import httpx

from app.models.extraction import ExtractedDocument
from app.models.summary import SummaryRequestConfig

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8000"


class ApiError(Exception):
    """A gateway answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def _error_message(response: httpx.Response, fallback: str) -> str:
    try:
        return response.json().get("error") or fallback
    except (ValueError, AttributeError):
        return fallback


def _success_field(response: httpx.Response, key: str, fallback: str) -> str:
    """Read a string field from a 2xx body; anything unexpected is an ApiError."""
    try:
        value = response.json()[key]
    except (ValueError, KeyError, TypeError):
        raise ApiError(fallback, response.status_code) from None
    if not isinstance(value, str):
        raise ApiError(fallback, response.status_code)
    return value


class ResumeApiClient:
    def __init__(self, client: httpx.Client):
        self.client = client

    @classmethod
    def connect(cls, base_url: str = DEFAULT_API_URL, timeout: float | None = None) -> "ResumeApiClient":
        # Parsing and generation can take minutes; leave timeouts to the server by default
        return cls(httpx.Client(base_url=base_url, timeout=timeout))

    def close(self) -> None:
        self.client.close()

    def extract(
        self,
        filename: str,
        content: bytes,
        content_type: str = "application/pdf",
    ) -> ExtractedDocument:
        response = self.client.post(
            "/api/extract",
            files={"file": (filename, content, content_type)},
        )
        if response.status_code >= 400:
            raise ApiError(
                _error_message(response, "Failed to extract text from file"),
                response.status_code,
            )

        text = _success_field(response, "text", "Failed to extract text from file")
        logger.info("Text extracted from %s (%d chars)", filename, len(text))
        return ExtractedDocument(filename=filename, text=text)

    def process(self, texts: list[str], config: SummaryRequestConfig) -> str:
        payload = {"texts": texts, **config.model_dump(by_alias=True)}
        response = self.client.post("/api/process", json=payload)
        if response.status_code >= 400:
            raise ApiError(
                _error_message(response, "Failed to generate resume"),
                response.status_code,
            )
        return _success_field(response, "resume", "Failed to generate resume")
