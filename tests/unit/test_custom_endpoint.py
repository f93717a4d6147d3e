"""Unit tests for the OpenAI-compatible endpoint client."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from ragcore.llm.custom_endpoint import CustomEndpointLLM


def _response(content="Hello", status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = {"choices": [{"message": {"content": content}}]}
    if status_code >= 400:
        error = requests.HTTPError(f"{status_code} error")
        error.response = response
        response.raise_for_status.side_effect = error
    return response


@pytest.mark.unit
class TestCustomEndpointLLM:
    """Tests for CustomEndpointLLM.invoke."""

    @patch("ragcore.llm.custom_endpoint.requests.post")
    def test_invoke_returns_content(self, mock_post):
        mock_post.return_value = _response("The answer")
        llm = CustomEndpointLLM(endpoint_url="http://test/v1/chat/completions", model="m")

        assert llm.invoke("question") == "The answer"

    @patch("ragcore.llm.custom_endpoint.requests.post")
    def test_invoke_payload(self, mock_post):
        """Test model, prompt and token budget are sent."""
        mock_post.return_value = _response()
        llm = CustomEndpointLLM(
            endpoint_url="http://test/v1/chat/completions",
            model="judge",
            api_key="secret",
            temperature=0.0,
            max_tokens=10,
            timeout=5,
        )

        llm.invoke("rate this")

        args, kwargs = mock_post.call_args
        assert args[0] == "http://test/v1/chat/completions"
        assert kwargs["json"] == {
            "model": "judge",
            "messages": [{"role": "user", "content": "rate this"}],
            "temperature": 0.0,
            "max_tokens": 10,
        }
        assert kwargs["headers"]["Authorization"] == "Bearer secret"
        assert kwargs["timeout"] == 5

    @patch("ragcore.llm.custom_endpoint.requests.post")
    def test_no_auth_header_without_key(self, mock_post):
        mock_post.return_value = _response()

        CustomEndpointLLM(endpoint_url="http://test", model="m").invoke("hi")

        assert "Authorization" not in mock_post.call_args.kwargs["headers"]

    @patch("ragcore.llm.custom_endpoint.requests.post")
    def test_single_attempt_by_default(self, mock_post):
        """Test failures are raised without retrying."""
        mock_post.return_value = _response(status_code=503)
        llm = CustomEndpointLLM(endpoint_url="http://test", model="m")

        with pytest.raises(requests.HTTPError):
            llm.invoke("hi")

        assert mock_post.call_count == 1

    @patch("ragcore.llm.custom_endpoint.time.sleep")
    @patch("ragcore.llm.custom_endpoint.requests.post")
    def test_retries_when_configured(self, mock_post, mock_sleep):
        mock_post.side_effect = [_response(status_code=503), _response("ok")]
        llm = CustomEndpointLLM(endpoint_url="http://test", model="m", max_retries=3, retry_delay=1.0)

        assert llm.invoke("hi") == "ok"
        assert mock_post.call_count == 2
        mock_sleep.assert_called_once_with(1.0)

    @patch("ragcore.llm.custom_endpoint.time.sleep")
    @patch("ragcore.llm.custom_endpoint.requests.post")
    def test_client_errors_not_retried(self, mock_post, mock_sleep):
        mock_post.return_value = _response(status_code=400)
        llm = CustomEndpointLLM(endpoint_url="http://test", model="m", max_retries=3)

        with pytest.raises(requests.HTTPError):
            llm.invoke("hi")

        assert mock_post.call_count == 1
        mock_sleep.assert_not_called()

    @patch("ragcore.llm.custom_endpoint.time.sleep")
    @patch("ragcore.llm.custom_endpoint.requests.post")
    def test_connection_errors_exhaust_retries(self, mock_post, mock_sleep):
        mock_post.side_effect = requests.ConnectionError("down")
        llm = CustomEndpointLLM(endpoint_url="http://test", model="m", max_retries=2, retry_delay=0.5)

        with pytest.raises(requests.ConnectionError):
            llm.invoke("hi")

        assert mock_post.call_count == 2

    @patch("ragcore.llm.custom_endpoint.requests.post")
    def test_malformed_response(self, mock_post):
        response = _response()
        response.json.return_value = {"choices": []}
        mock_post.return_value = response

        with pytest.raises(ValueError):
            CustomEndpointLLM(endpoint_url="http://test", model="m").invoke("hi")

    @patch("ragcore.llm.custom_endpoint.requests.post")
    def test_null_content(self, mock_post):
        mock_post.return_value = _response(content=None)

        with pytest.raises(ValueError):
            CustomEndpointLLM(endpoint_url="http://test", model="m").invoke("hi")
