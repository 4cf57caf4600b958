from dataclasses import dataclass
from typing import Optional

@dataclass(frozen=True)
class FetchResult:
    text: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, text: str) -> "FetchResult":
        return cls(text=text)

    @classmethod
    def err(cls, message: str) -> "FetchResult":
        return cls(error=message)

    @property
    def is_ok(self) -> bool:
        return self.error is None

class BaseFetcher:
    def fetch(self, url: str) -> str:
        raise NotImplementedError

class BaseAsyncFetcher:
    async def fetch(self, url: str) -> str:
        raise NotImplementedError
