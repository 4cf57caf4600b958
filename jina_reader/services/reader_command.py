import asyncio
import uuid
from typing import Dict, Optional, Sequence, Set, Tuple

from jina_reader.core.config import settings
from jina_reader.core.errors import FetchError, MissingArgument, UnknownCommand, UnknownInvocation
from jina_reader.fetch.base import BaseAsyncFetcher, BaseFetcher, FetchResult
from jina_reader.fetch.slot import ResultSlot
from jina_reader.schemas import OutputSection, SlashCommand, SlashCommandOutput

COMMAND_NAME = "r"

READER_COMMAND = SlashCommand(
    name=COMMAND_NAME,
    description="Fetch a web page as text through Jina Reader",
    requires_argument=True,
    tooltip_text="r <url>",
)

PLACEHOLDER_TEXT = "Fetching content..."
# Kept as the literal 22 even though the placeholder text is 20 characters
PLACEHOLDER_RANGE = (0, 22)

def build_target_url(url: str, prefix: Optional[str] = None) -> str:
    """Prefix the raw argument with the reader proxy. No escaping is applied."""
    return f"{prefix if prefix is not None else settings.JINA_READER_PREFIX}{url}"

def parse_invocation(name: str, arguments: Sequence[str]) -> str:
    """Validate the command and return the URL argument"""
    if name != COMMAND_NAME:
        raise UnknownCommand(name)
    if not arguments:
        raise MissingArgument()
    return arguments[0]

def text_output(text: str) -> SlashCommandOutput:
    """Fetched text with one section spanning all of it"""
    return SlashCommandOutput(
        text=text,
        sections=[OutputSection(range=(0, len(text)), label=settings.COMMAND_LABEL)],
    )

def placeholder_output() -> SlashCommandOutput:
    """Immediate reply while a background fetch is running"""
    return SlashCommandOutput(
        text=PLACEHOLDER_TEXT,
        sections=[OutputSection(range=PLACEHOLDER_RANGE, label=settings.COMMAND_LABEL)],
    )

class ReaderCommand:
    """Blocking handler: returns the fetched text or raises the fetch error."""

    def __init__(self, fetcher: BaseFetcher):
        self.fetcher = fetcher

    def handle(self, name: str, arguments: Sequence[str]) -> SlashCommandOutput:
        url = parse_invocation(name, arguments)
        target = build_target_url(url)
        print(f"FETCHING {target}")
        text = self.fetcher.fetch(target)
        print(f"FETCHED {len(text)} characters from {target}")
        return text_output(text)

class AsyncReaderCommand:
    """
    Non-blocking handler.

    Each invocation schedules its fetch on the running event loop and gets
    its own ResultSlot, registered under a fresh invocation id. The caller
    receives a placeholder immediately and asks for the real output later
    with retrieve() or wait().

    A slot is forgotten once a finished result has been handed out. At most
    max_invocations slots are kept; submitting beyond that evicts the oldest.
    """

    def __init__(self, fetcher: BaseAsyncFetcher, max_invocations: Optional[int] = None):
        self.fetcher = fetcher
        self.max_invocations = max_invocations if max_invocations is not None else settings.MAX_INVOCATIONS
        self._slots: Dict[str, ResultSlot] = {}
        self._tasks: Set[asyncio.Task] = set()

    def submit(self, name: str, arguments: Sequence[str]) -> Tuple[str, SlashCommandOutput]:
        url = parse_invocation(name, arguments)
        target = build_target_url(url)

        invocation_id = uuid.uuid4().hex
        slot = ResultSlot()
        self._slots[invocation_id] = slot
        while len(self._slots) > self.max_invocations:
            evicted = next(iter(self._slots))
            del self._slots[evicted]
            print(f"EVICTED invocation {evicted}")

        task = asyncio.get_running_loop().create_task(self._run(target, slot))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

        print(f"SCHEDULED {target} as {invocation_id}")
        return invocation_id, placeholder_output()

    def handle(self, name: str, arguments: Sequence[str]) -> SlashCommandOutput:
        _, output = self.submit(name, arguments)
        return output

    async def _run(self, target: str, slot: ResultSlot) -> None:
        try:
            text = await self.fetcher.fetch(target)
            print("Successfully fetched content")
            result = FetchResult.ok(text)
        except FetchError as e:
            print(str(e))
            result = FetchResult.err(str(e))
        except Exception as e:
            # Every outcome is written to the slot, including unexpected errors
            print(f"FETCH CRASHED for {target}: {e!r}")
            result = FetchResult.err(f"Request failed: {e}")

        if not slot.set(result):
            print(f"RESULT DROPPED for {target}: slot already filled")

    def slot(self, invocation_id: str) -> ResultSlot:
        try:
            return self._slots[invocation_id]
        except KeyError:
            raise UnknownInvocation(invocation_id) from None

    def retrieve(self, invocation_id: str) -> SlashCommandOutput:
        """Current output for an invocation: the placeholder while pending"""
        result = self.slot(invocation_id).peek()
        if result is None:
            return placeholder_output()
        self._slots.pop(invocation_id, None)
        return _result_output(result)

    async def wait(self, invocation_id: str, timeout: Optional[float] = None) -> SlashCommandOutput:
        result = await self.slot(invocation_id).wait(timeout)
        self._slots.pop(invocation_id, None)
        return _result_output(result)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    @property
    def tracked(self) -> int:
        return len(self._slots)

def _result_output(result: FetchResult) -> SlashCommandOutput:
    if not result.is_ok:
        raise FetchError(result.error)
    return text_output(result.text)

_handler = None

def create_handler():
    """Build the handler for the configured FETCH_MODE"""
    mode = settings.FETCH_MODE
    if mode == "sync":
        if settings.USE_MOCK:
            from jina_reader.fetch.mock import MockFetcher
            return ReaderCommand(MockFetcher())
        from jina_reader.fetch.requests_fetcher import RequestsFetcher
        return ReaderCommand(RequestsFetcher())
    if mode == "async":
        if settings.USE_MOCK:
            from jina_reader.fetch.mock import MockAsyncFetcher
            return AsyncReaderCommand(MockAsyncFetcher())
        from jina_reader.fetch.httpx_fetcher import HttpxFetcher
        return AsyncReaderCommand(HttpxFetcher())
    raise ValueError(f"FETCH_MODE must be 'sync' or 'async', got {mode!r}")

def get_handler():
    global _handler
    if _handler is None:
        _handler = create_handler()
    return _handler

def reset_handler():
    """Drop the shared handler so the next call picks up changed settings"""
    global _handler
    _handler = None
