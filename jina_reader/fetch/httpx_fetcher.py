import httpx
from typing import Optional
from pydantic import ValidationError

from jina_reader.core.config import settings
from jina_reader.core.errors import DecodeFailure, TransportFailure
from jina_reader.schemas import JinaResponse
from .base import BaseAsyncFetcher

class HttpxFetcher(BaseAsyncFetcher):
    """
    Non-blocking fetcher for hosts driven by an event loop.

    Expects the reader to answer with a JSON envelope {"text": "..."}.
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None, timeout_sec: Optional[float] = None):
        self.client = client
        self.timeout_sec = timeout_sec if timeout_sec is not None else settings.REQUEST_TIMEOUT

    async def fetch(self, url: str) -> str:
        try:
            if self.client is not None:
                response = await self.client.get(url, follow_redirects=True)
            else:
                async with httpx.AsyncClient(timeout=self.timeout_sec, follow_redirects=True) as client:
                    response = await client.get(url)
        # InvalidURL is not an HTTPError; raised for control characters in the raw argument
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportFailure(f"Request failed: {e}") from e

        try:
            return JinaResponse.model_validate_json(response.content).text
        except ValidationError as e:
            raise DecodeFailure(f"Failed to parse response: {e}") from e
