"""HTTP client for the external risk-scoring service.

One AsyncClient is shared by the whole application so connections are
pooled and redirects are followed. The outbound call is bounded by the
configured timeout; there is no retry and no backoff.
"""

import logging
from typing import Optional

import httpx

from risk_proxy.config import ProxySettings
from risk_proxy.errors import UpstreamError

logger = logging.getLogger(__name__)

SPREADSHEET_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class UpstreamClient:
    """Forwards uploaded spreadsheets to the scoring service."""

    def __init__(
        self,
        settings: ProxySettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self._client = httpx.AsyncClient(
            base_url=settings.upstream_base_url,
            timeout=settings.upstream_timeout_seconds,
            follow_redirects=True,
            transport=transport,
        )

    async def analyze_batch(
        self,
        filename: str,
        content: bytes,
        use_llm: str = "true",
    ) -> httpx.Response:
        """POST a spreadsheet to the batch endpoint and return the response.

        The file is re-wrapped under the spreadsheet MIME type whatever type
        the caller uploaded it with. Raises UpstreamError on a non-2xx status.
        """
        path = self.settings.upstream_path
        logger.info(
            "Sending %s (%d bytes) to %s%s?use_llm=%s",
            filename,
            len(content),
            self.settings.upstream_base_url,
            path,
            use_llm,
        )

        response = await self._client.post(
            path,
            params={"use_llm": use_llm},
            files={"file": (filename, content, SPREADSHEET_MIME)},
        )

        logger.info(
            "Upstream response: status=%d content_type=%s",
            response.status_code,
            response.headers.get("content-type"),
        )

        if not response.is_success:
            raise UpstreamError(response.status_code, response.text)

        return response

    async def aclose(self) -> None:
        await self._client.aclose()
