import os
import sys
from unittest import mock

CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, os.pardir))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from tradelog.ai import client as client_module
from tradelog.ai.client import GeminiClient
from tradelog.config.schema import AIConfig
from tradelog.errors import AIServiceError

import unittest


class TestGeminiClient(unittest.TestCase):
    def test_sdk_client_is_created_lazily_with_config(self) -> None:
        with mock.patch.object(client_module.genai, "Client") as sdk_cls:
            sdk_cls.return_value.models.generate_content.return_value = mock.Mock(text='{"a": 1}')
            client = GeminiClient(AIConfig(model="gemini-test", api_key="secret"))
            sdk_cls.assert_not_called()

            text = client.generate("prompt")

        self.assertEqual(text, '{"a": 1}')
        sdk_cls.assert_called_once_with(api_key="secret")
        sdk_cls.return_value.models.generate_content.assert_called_once_with(
            model="gemini-test", contents="prompt"
        )

    def test_sdk_error_is_wrapped(self) -> None:
        with mock.patch.object(client_module.genai, "Client") as sdk_cls:
            failure = RuntimeError("API key not valid")
            sdk_cls.return_value.models.generate_content.side_effect = failure
            client = GeminiClient(AIConfig(api_key="bad"))
            with self.assertLogs(client_module.logger, level="ERROR"):
                with self.assertRaises(AIServiceError) as ctx:
                    client.generate("prompt")
        self.assertIs(ctx.exception.__cause__, failure)

    def test_missing_key_fails_without_touching_sdk(self) -> None:
        with mock.patch.object(client_module.genai, "Client") as sdk_cls:
            client = GeminiClient(AIConfig(api_key="", api_key_env="MY_KEY"))
            with self.assertLogs(client_module.logger, level="ERROR"):
                with self.assertRaises(AIServiceError) as ctx:
                    client.generate("prompt")
        sdk_cls.assert_not_called()
        self.assertIn("MY_KEY", str(ctx.exception))

    def test_empty_response_is_an_error(self) -> None:
        with mock.patch.object(client_module.genai, "Client") as sdk_cls:
            sdk_cls.return_value.models.generate_content.return_value = mock.Mock(text=None)
            client = GeminiClient(AIConfig(api_key="k"))
            with self.assertLogs(client_module.logger, level="ERROR"):
                with self.assertRaises(AIServiceError):
                    client.generate("prompt")


if __name__ == '__main__':
    unittest.main()
