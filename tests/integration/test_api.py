import time
from unittest.mock import patch
from fastapi.testclient import TestClient

from jina_reader.core import config
from jina_reader.core.errors import TransportFailure
from jina_reader.main import app

# Test client
client = TestClient(app)

def _poll(test_client, invocation_id, attempts=100):
    """Poll a background invocation until it leaves the placeholder state"""
    response = None
    for _ in range(attempts):
        response = test_client.get(f"/slash-command/{invocation_id}")
        if response.status_code != 200 or response.json()["text"] != "Fetching content...":
            return response
        time.sleep(0.01)
    return response

class TestSyncSlashCommand:
    """Integration tests for POST /slash-command in sync mode"""

    @patch('jina_reader.fetch.requests_fetcher.RequestsFetcher.fetch')
    def test_run_success(self, mock_fetch):
        """Test fetched text is returned with one full-length section"""
        config.settings.USE_MOCK = False
        mock_fetch.return_value = "Mocked response text"

        response = client.post(
            "/slash-command",
            json={"name": "r", "arguments": ["https://example.com"]}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["text"] == "Mocked response text"
        assert data["sections"] == [{"range": [0, 20], "label": "Jina Reader"}]
        assert data["invocation_id"] is None
        mock_fetch.assert_called_once_with("https://r.jina.ai/https://example.com")

    @patch('jina_reader.fetch.requests_fetcher.RequestsFetcher.fetch')
    def test_run_fetch_error(self, mock_fetch):
        """Test fetch errors surface as 502 with the message verbatim"""
        config.settings.USE_MOCK = False
        mock_fetch.side_effect = TransportFailure("HTTP request failed: connection refused")

        response = client.post(
            "/slash-command",
            json={"name": "r", "arguments": ["https://unreachable-site.com"]}
        )

        assert response.status_code == 502
        assert response.json()["detail"] == "HTTP request failed: connection refused"

    def test_run_mock_mode(self):
        """Test mock mode answers without network access"""
        response = client.post(
            "/slash-command",
            json={"name": "r", "arguments": ["https://example.com"]}
        )

        assert response.status_code == 200
        assert "https://r.jina.ai/https://example.com" in response.json()["text"]

    def test_unknown_command(self):
        """Test unknown command name"""
        response = client.post("/slash-command", json={"name": "unknown", "arguments": []})

        assert response.status_code == 400
        assert response.json()["detail"] == "Unknown slash command: unknown"

    def test_missing_url(self):
        """Test command without a URL argument"""
        response = client.post("/slash-command", json={"name": "r"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Please provide a URL."

    def test_missing_name(self):
        """Test request body without a command name"""
        response = client.post("/slash-command", json={"arguments": ["x"]})

        assert response.status_code == 422  # Validation error

    def test_result_endpoint_unavailable(self):
        """Test polling is only offered in async mode"""
        response = client.get("/slash-command/abc")

        assert response.status_code == 404

class TestAsyncSlashCommand:
    """Integration tests for background invocations"""

    def test_placeholder_then_result(self):
        """Test placeholder response followed by the fetched content"""
        config.settings.FETCH_MODE = "async"
        with TestClient(app) as test_client:
            response = test_client.post(
                "/slash-command",
                json={"name": "r", "arguments": ["https://example.com"]}
            )

            assert response.status_code == 200
            data = response.json()
            assert data["text"] == "Fetching content..."
            assert data["sections"] == [{"range": [0, 22], "label": "Jina Reader"}]
            assert data["invocation_id"]

            result = _poll(test_client, data["invocation_id"])
            assert result.status_code == 200
            result_data = result.json()
            assert "https://r.jina.ai/https://example.com" in result_data["text"]
            assert result_data["sections"] == [
                {"range": [0, len(result_data["text"])], "label": "Jina Reader"}
            ]

    @patch('jina_reader.fetch.mock.MockAsyncFetcher.fetch')
    def test_background_error(self, mock_fetch):
        """Test background failures are reported when polled"""
        config.settings.FETCH_MODE = "async"
        mock_fetch.side_effect = TransportFailure("Request failed: connection refused")

        with TestClient(app) as test_client:
            response = test_client.post(
                "/slash-command",
                json={"name": "r", "arguments": ["https://example.com"]}
            )
            assert response.status_code == 200

            result = _poll(test_client, response.json()["invocation_id"])
            assert result.status_code == 502
            assert result.json()["detail"] == "Request failed: connection refused"

    def test_validation_is_immediate(self):
        """Test argument errors are returned without scheduling anything"""
        config.settings.FETCH_MODE = "async"
        with TestClient(app) as test_client:
            response = test_client.post("/slash-command", json={"name": "r", "arguments": []})

            assert response.status_code == 400
            assert response.json()["detail"] == "Please provide a URL."

    def test_unknown_invocation(self):
        """Test polling an id that was never issued"""
        config.settings.FETCH_MODE = "async"
        with TestClient(app) as test_client:
            response = test_client.get("/slash-command/does-not-exist")

            assert response.status_code == 404
            assert response.json()["detail"] == "Unknown invocation: does-not-exist"

class TestHealthEndpoints:
    """Test health and utility endpoints"""

    def test_health_endpoint(self):
        """Test health check endpoint"""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root_endpoint(self):
        """Test root endpoint"""
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert "service" in data
        assert "endpoints" in data

    def test_list_commands(self):
        """Test registered command descriptors"""
        response = client.get("/slash-commands")
        assert response.status_code == 200
        assert response.json() == [{
            "name": "r",
            "description": "Fetch a web page as text through Jina Reader",
            "requires_argument": True,
            "tooltip_text": "r <url>"
        }]
