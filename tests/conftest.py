import pytest
from jina_reader.core import config
from jina_reader.services import reader_command

@pytest.fixture(autouse=True)
def setup_test_environment():
    """Setup test environment with default settings and a fresh handler"""
    # Store original values
    original_mode = config.settings.FETCH_MODE
    original_use_mock = config.settings.USE_MOCK
    original_prefix = config.settings.JINA_READER_PREFIX
    original_label = config.settings.COMMAND_LABEL

    # Override settings for tests - never hit the network by default
    config.settings.FETCH_MODE = "sync"
    config.settings.USE_MOCK = True
    config.settings.JINA_READER_PREFIX = "https://r.jina.ai/"
    config.settings.COMMAND_LABEL = "Jina Reader"
    reader_command.reset_handler()

    yield

    # Restore original values
    config.settings.FETCH_MODE = original_mode
    config.settings.USE_MOCK = original_use_mock
    config.settings.JINA_READER_PREFIX = original_prefix
    config.settings.COMMAND_LABEL = original_label
    reader_command.reset_handler()
