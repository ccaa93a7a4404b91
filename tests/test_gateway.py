import unittest
from unittest.mock import MagicMock, patch

import speech_gateway.gateway as gateway_mod
from speech_gateway.config import GatewayConfig


class TestSpeechGateway(unittest.TestCase):
    def setUp(self):
        self.config = GatewayConfig(project_id="test-project", create_timeout=42)

    def test_wires_the_shared_client(self):
        client = MagicMock()
        gateway = gateway_mod.SpeechGateway.from_config(self.config, client=client)

        self.assertIs(gateway.client, client)
        self.assertIs(gateway.dispatcher.registry, gateway.registry)
        self.assertEqual(gateway.registry.waiter.timeout, 42.0)

    @patch.object(gateway_mod, "create_speech_client")
    def test_builds_client_from_config(self, mock_create):
        gateway = gateway_mod.SpeechGateway.from_config(self.config)

        mock_create.assert_called_once_with(self.config)
        self.assertIs(gateway.client, mock_create.return_value)

    def test_close_is_idempotent(self):
        client = MagicMock()

        with gateway_mod.SpeechGateway(self.config, client) as gateway:
            self.assertFalse(gateway.closed)

        self.assertTrue(gateway.closed)
        gateway.close()
        client.transport.close.assert_called_once()


if __name__ == "__main__":
    unittest.main()
