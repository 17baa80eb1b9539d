"""Document parsing via the LlamaCloud parsing API (raw httpx, no SDK)."""

import asyncio
import logging
import mimetypes
import time
from pathlib import Path

import httpx

from app.config import get_settings

logger = logging.getLogger(__name__)

SUCCESS_STATUSES = {"SUCCESS", "PARTIAL_SUCCESS"}
FAILURE_STATUSES = {"ERROR", "CANCELLED", "CANCELED"}


class ParsingError(Exception):
    """The parsing service rejected the job or never finished it."""


class ParsingService:
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        result_type: str | None = None,
        check_interval: float | None = None,
        max_timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        settings = get_settings()
        api_key = api_key if api_key is not None else settings.llama_cloud_api_key
        self.base_url = f"{(base_url or settings.llama_cloud_base_url).rstrip('/')}/api/v1/parsing"
        self.headers = {"Authorization": f"Bearer {api_key}"}
        self.result_type = result_type or settings.parse_result_type
        self.check_interval = (
            check_interval if check_interval is not None else settings.parse_check_interval
        )
        self.max_timeout = max_timeout if max_timeout is not None else settings.parse_max_timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers=self.headers, transport=self._transport, timeout=60.0
        )

    async def parse_pages(self, path: Path) -> list[str]:
        """
        Parse a local file and return the text of each page, in page order.

        Uploads the file, polls the job until it finishes, then reads the
        per-page JSON result.
        """
        async with self._client() as client:
            job_id = await self._upload(client, path)
            await self._wait_for_job(client, job_id)
            return await self._fetch_pages(client, job_id)

    async def _upload(self, client: httpx.AsyncClient, path: Path) -> str:
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        with path.open("rb") as f:
            response = await client.post(
                f"{self.base_url}/upload",
                files={"file": (path.name, f, content_type)},
            )
        response.raise_for_status()
        job_id = response.json()["id"]
        logger.info("Started parse job %s for %s", job_id, path.name)
        return job_id

    async def _wait_for_job(self, client: httpx.AsyncClient, job_id: str) -> None:
        started = time.monotonic()
        while True:
            response = await client.get(f"{self.base_url}/job/{job_id}")
            response.raise_for_status()
            status = response.json().get("status", "")

            if status in SUCCESS_STATUSES:
                return
            if status in FAILURE_STATUSES:
                raise ParsingError(f"Parse job {job_id} finished with status {status}")
            if time.monotonic() - started > self.max_timeout:
                raise ParsingError(
                    f"Parse job {job_id} did not finish within {self.max_timeout:g}s"
                )

            await asyncio.sleep(self.check_interval)

    async def _fetch_pages(self, client: httpx.AsyncClient, job_id: str) -> list[str]:
        response = await client.get(f"{self.base_url}/job/{job_id}/result/json")
        response.raise_for_status()

        pages = sorted(response.json().get("pages", []), key=lambda p: p.get("page", 0))
        key = "md" if self.result_type == "markdown" else "text"
        return [page.get(key) or "" for page in pages]


def get_parsing_service() -> ParsingService:
    return ParsingService()
