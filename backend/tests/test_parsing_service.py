"""
Parsing service client tests (no network; httpx.MockTransport)
"""
import httpx
import pytest

from app.services.parsing_service import ParsingError, ParsingService

BASE = "https://parse.test"


class FakeParseApi:
    """Minimal stand-in for the LlamaCloud parsing endpoints."""

    def __init__(self, statuses=("PENDING", "SUCCESS"), pages=None, upload_status=200):
        self.statuses = list(statuses)
        self.pages = pages if pages is not None else [
            {"page": 2, "text": "plain two", "md": "## two"},
            {"page": 1, "text": "plain one", "md": "# one"},
        ]
        self.upload_status = upload_status
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/api/v1/parsing/upload":
            if self.upload_status != 200:
                return httpx.Response(self.upload_status, json={"detail": "Invalid API key"})
            return httpx.Response(200, json={"id": "job-1", "status": "PENDING"})
        if path == "/api/v1/parsing/job/job-1":
            status = self.statuses.pop(0) if len(self.statuses) > 1 else self.statuses[0]
            return httpx.Response(200, json={"id": "job-1", "status": status})
        if path == "/api/v1/parsing/job/job-1/result/json":
            return httpx.Response(200, json={"pages": self.pages})
        return httpx.Response(404)


def make_service(api, **overrides) -> ParsingService:
    options = {
        "api_key": "llx-test",
        "base_url": BASE,
        "result_type": "markdown",
        "check_interval": 0,
        "max_timeout": 60,
    }
    options.update(overrides)
    return ParsingService(transport=httpx.MockTransport(api), **options)


@pytest.fixture
def pdf(tmp_path):
    path = tmp_path / "1700000000000-notes.pdf"
    path.write_bytes(b"%PDF-1.4")
    return path


@pytest.mark.anyio
async def test_returns_markdown_pages_in_page_order(pdf):
    api = FakeParseApi()

    pages = await make_service(api).parse_pages(pdf)

    assert pages == ["# one", "## two"]


@pytest.mark.anyio
async def test_text_result_type(pdf):
    pages = await make_service(FakeParseApi(), result_type="text").parse_pages(pdf)

    assert pages == ["plain one", "plain two"]


@pytest.mark.anyio
async def test_polls_until_finished(pdf):
    api = FakeParseApi(statuses=["PENDING", "PENDING", "SUCCESS"])

    await make_service(api).parse_pages(pdf)

    polls = [r for r in api.requests if r.url.path == "/api/v1/parsing/job/job-1"]
    assert len(polls) == 3


@pytest.mark.anyio
async def test_sends_bearer_token_and_file(pdf):
    api = FakeParseApi()

    await make_service(api).parse_pages(pdf)

    upload = api.requests[0]
    assert upload.method == "POST"
    assert upload.headers["Authorization"] == "Bearer llx-test"
    assert b"1700000000000-notes.pdf" in upload.content


@pytest.mark.anyio
@pytest.mark.parametrize("status", ["ERROR", "CANCELLED"])
async def test_failed_job_raises(pdf, status):
    with pytest.raises(ParsingError, match=status):
        await make_service(FakeParseApi(statuses=[status])).parse_pages(pdf)


@pytest.mark.anyio
async def test_gives_up_after_max_timeout(pdf):
    api = FakeParseApi(statuses=["PENDING"])

    with pytest.raises(ParsingError, match="did not finish"):
        await make_service(api, max_timeout=-1).parse_pages(pdf)


@pytest.mark.anyio
async def test_upload_rejection_propagates(pdf):
    with pytest.raises(httpx.HTTPStatusError):
        await make_service(FakeParseApi(upload_status=401)).parse_pages(pdf)


@pytest.mark.anyio
async def test_partial_success_is_accepted(pdf):
    pages = await make_service(FakeParseApi(statuses=["PARTIAL_SUCCESS"])).parse_pages(pdf)

    assert len(pages) == 2
