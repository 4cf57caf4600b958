from typing import Optional
import requests

from jina_reader.core.config import settings
from jina_reader.core.errors import DecodeFailure, TransportFailure
from .base import BaseFetcher

class RequestsFetcher(BaseFetcher):
    """Blocking fetcher: returns the raw response body as text."""

    def __init__(self, session: Optional[requests.Session] = None, timeout_sec: Optional[float] = None):
        self.session = session or requests.Session()
        self.timeout_sec = timeout_sec if timeout_sec is not None else settings.REQUEST_TIMEOUT

    def fetch(self, url: str) -> str:
        try:
            resp = self.session.get(url, timeout=self.timeout_sec)
            body = resp.content
        except requests.RequestException as e:
            raise TransportFailure(f"HTTP request failed: {e}") from e

        try:
            return body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeFailure(f"bytes should be valid utf8: {e}") from e
