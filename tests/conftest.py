"""Shared fixtures for the test suite."""

import io

import httpx
import pytest
from fastapi.testclient import TestClient
from openpyxl import Workbook

from risk_proxy.config import ProxySettings
from risk_proxy.main import app
from risk_proxy.profiling.normalize import NormalizedRow, normalize_row
from risk_proxy.routes.analyze import get_upstream
from risk_proxy.upstream.client import SPREADSHEET_MIME, UpstreamClient


HEADER = [
    "CustomerNo",
    "DocumentName",
    "BirthCountry",
    "Citizenship",
    "RiskScore",
    "RiskFlag",
    "RiskReason",
]

JANE_ROE = ["CUS-1", "Jane Roe", "USA", "Canada", 75, "RED", "Sanction match possible; PEP connection"]


class FakeScoringService:
    """Stands in for the external scoring service behind an httpx.MockTransport.

    Records every request it receives and answers with the configured
    status, body and content type. ``moved_to`` makes every other path
    answer with a 307 pointing there; ``error`` is raised instead of
    answering.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.moved_to = None
        self.error = None
        self.reply(200, b'{"ok": true}', "application/json")

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error(request)
        if self.moved_to is not None and request.url.path != self.moved_to:
            return httpx.Response(307, headers={"location": self.moved_to})
        return httpx.Response(
            self.status_code,
            content=self.content,
            headers={"content-type": self.content_type},
        )

    def reply(self, status_code: int, content: bytes, content_type: str) -> None:
        self.status_code = status_code
        self.content = content
        self.content_type = content_type

    def reply_with_workbook(self, rows, header=HEADER) -> None:
        self.reply(200, make_workbook(rows, header=header), SPREADSHEET_MIME)


@pytest.fixture
def settings():
    return ProxySettings(upstream_base_url="http://scoring.test")


@pytest.fixture
def scoring_service():
    return FakeScoringService()


@pytest.fixture
def upstream(settings, scoring_service):
    return UpstreamClient(settings, transport=httpx.MockTransport(scoring_service))


@pytest.fixture
def client(upstream):
    app.dependency_overrides[get_upstream] = lambda: upstream
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


def make_workbook(rows, header=HEADER) -> bytes:
    """Build an in-memory xlsx whose first sheet holds header + rows."""
    wb = Workbook()
    ws = wb.active
    if header is not None:
        ws.append(header)
    for row in rows:
        ws.append(row)
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


def make_row(
    customer_no="CUS-1",
    name="Jane Roe",
    birth_country="USA",
    citizenship="USA",
    score=10,
    flag="GREEN",
    reason="",
    blacklist=None,
    index=0,
) -> NormalizedRow:
    row = {
        "CustomerNo": customer_no,
        "DocumentName": name,
        "BirthCountry": birth_country,
        "Citizenship": citizenship,
        "RiskScore": score,
        "RiskFlag": flag,
        "RiskReason": reason,
        "LocalBlackListFlag": blacklist,
    }
    return normalize_row({k: v for k, v in row.items() if v is not None}, index)


def upload(client, content=b"xlsx-bytes", filename="customers.xlsx", params=None):
    return client.post(
        "/api/analyze",
        params=params,
        files={"file": (filename, content, "application/octet-stream")},
    )
