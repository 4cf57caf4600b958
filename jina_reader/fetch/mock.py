from .base import BaseAsyncFetcher, BaseFetcher

def _mock_text(url: str) -> str:
    """Canned reader output for development without network requests"""
    return (
        "Title: Mock page\n\n"
        f"URL Source: {url}\n\n"
        "Markdown Content:\n"
        "This is mocked reader content."
    )

class MockFetcher(BaseFetcher):
    def fetch(self, url: str) -> str:
        print(f"MOCK FETCH {url}")
        return _mock_text(url)

class MockAsyncFetcher(BaseAsyncFetcher):
    async def fetch(self, url: str) -> str:
        print(f"MOCK FETCH {url}")
        return _mock_text(url)
