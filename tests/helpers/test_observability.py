from unittest.mock import Mock, patch

import pytest

from preachpoint.config import LangfuseConfig
from preachpoint.helpers.observability import setup_langfuse_client, setup_observability


@pytest.fixture
def langfuse_config() -> LangfuseConfig:
    return LangfuseConfig(
        public_key="pk-test", secret_key="sk-test", host="https://langfuse.example.com"
    )


class TestSetupObservability:
    @patch("preachpoint.helpers.observability.LlamaIndexInstrumentor")
    @patch("preachpoint.helpers.observability.setup_langfuse_client")
    def test_skipped_without_keys(self, mock_setup_client, mock_instrumentor):
        config = LangfuseConfig(public_key=None, secret_key=None)

        assert setup_observability(config) is False
        mock_setup_client.assert_not_called()
        mock_instrumentor.assert_not_called()

    @patch("preachpoint.helpers.observability.LlamaIndexInstrumentor")
    @patch("preachpoint.helpers.observability.setup_langfuse_client")
    def test_instruments_llama_index(
        self, mock_setup_client, mock_instrumentor, langfuse_config
    ):
        assert setup_observability(langfuse_config) is True
        mock_setup_client.assert_called_once_with(langfuse_config)
        mock_instrumentor.return_value.instrument.assert_called_once()

    @patch("preachpoint.helpers.observability.LlamaIndexInstrumentor")
    @patch("preachpoint.helpers.observability.setup_langfuse_client")
    def test_auth_failure_is_not_fatal(
        self, mock_setup_client, mock_instrumentor, langfuse_config
    ):
        mock_setup_client.side_effect = Exception("Langfuse authentication failed.")

        assert setup_observability(langfuse_config) is False
        mock_instrumentor.assert_not_called()


class TestSetupLangfuseClient:
    @patch("preachpoint.helpers.observability.Langfuse")
    def test_client_uses_configured_host(self, mock_langfuse, langfuse_config):
        mock_langfuse.return_value = Mock(auth_check=Mock(return_value=True))

        client = setup_langfuse_client(langfuse_config)

        assert client is mock_langfuse.return_value
        mock_langfuse.assert_called_once_with(
            public_key="pk-test",
            secret_key="sk-test",
            host="https://langfuse.example.com",
        )

    @patch("preachpoint.helpers.observability.Langfuse")
    def test_auth_check_failure(self, mock_langfuse, langfuse_config):
        mock_langfuse.return_value = Mock(auth_check=Mock(return_value=False))

        with pytest.raises(Exception, match="authentication failed"):
            setup_langfuse_client(langfuse_config)
