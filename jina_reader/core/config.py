import os

class Settings:
    # Jina Reader proxy
    JINA_READER_PREFIX: str = os.getenv("JINA_READER_PREFIX", "https://r.jina.ai/")

    # Execution strategy: "sync" blocks until the body is read,
    # "async" schedules the request and returns a placeholder
    FETCH_MODE: str = os.getenv("FETCH_MODE", "sync").lower()

    # Development
    USE_MOCK: bool = os.getenv("USE_MOCK", "0").lower() in ("1", "true", "yes")

    # HTTP
    REQUEST_TIMEOUT: float = float(os.getenv("REQUEST_TIMEOUT", "30"))

    # Background invocations kept for retrieval; oldest are evicted beyond this
    MAX_INVOCATIONS: int = int(os.getenv("MAX_INVOCATIONS", "1000"))

    # Output
    COMMAND_LABEL: str = os.getenv("COMMAND_LABEL", "Jina Reader")

settings = Settings()
