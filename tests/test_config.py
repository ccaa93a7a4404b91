import unittest

import speech_gateway.config as config_mod
from speech_gateway.messages import messages_for


class TestConfig(unittest.TestCase):
    def test_defaults(self):
        c = config_mod.GatewayConfig(project_id="p")
        self.assertEqual(c.location, "global")
        self.assertEqual(c.language_codes, ["ko-KR"])
        self.assertEqual(c.model, "long")
        self.assertEqual(c.recognizer_id, "permanent-recognizer")
        self.assertEqual(c.create_timeout, 300.0)
        self.assertEqual(c.message_locale, "ko")
        self.assertIsNone(c.credentials_json)

    def test_language_codes_string_is_split(self):
        c = config_mod.GatewayConfig(project_id="p", language_codes="ko-KR, en-US")
        self.assertEqual(c.language_codes, ["ko-KR", "en-US"])

    def test_project_id_required(self):
        with self.assertRaises(ValueError):
            config_mod.GatewayConfig()

    def test_empty_language_codes_and_model_raise(self):
        with self.assertRaises(ValueError):
            config_mod.GatewayConfig(project_id="p", language_codes=[])
        with self.assertRaises(ValueError):
            config_mod.GatewayConfig(project_id="p", model="")

    def test_invalid_create_timeout(self):
        for bad in (0, -5, float("inf")):
            with self.assertRaises(ValueError):
                config_mod.GatewayConfig(project_id="p", create_timeout=bad)

    def test_invalid_locale_and_port(self):
        with self.assertRaises(ValueError):
            config_mod.GatewayConfig(project_id="p", message_locale="fr")
        with self.assertRaises(ValueError):
            config_mod.GatewayConfig(project_id="p", port=0)

    def test_from_env(self):
        c = config_mod.GatewayConfig.from_env(
            {
                "GCP_PROJECT_ID": "my-project",
                "GCP_LOCATION": "us-central1",
                "SPEECH_LANGUAGE_CODES": "ko-KR,en-US",
                "SPEECH_MODEL": "chirp_2",
                "GOOGLE_CLOUD_CREDENTIALS_JSON": "e30=",
                "SPEECH_RECOGNIZER_ID": "shared",
                "RECOGNIZER_CREATE_TIMEOUT": "30",
                "SPEECH_MESSAGE_LOCALE": "en",
                "GATEWAY_PORT": "9000",
                "GATEWAY_HOST": "",
            }
        )
        self.assertEqual(c.project_id, "my-project")
        self.assertEqual(c.location, "us-central1")
        self.assertEqual(c.language_codes, ["ko-KR", "en-US"])
        self.assertEqual(c.model, "chirp_2")
        self.assertEqual(c.credentials_json, "e30=")
        self.assertEqual(c.recognizer_id, "shared")
        self.assertEqual(c.create_timeout, 30.0)
        self.assertEqual(c.message_locale, "en")
        self.assertEqual(c.port, 9000)
        # Empty values fall back to the defaults
        self.assertEqual(c.host, "0.0.0.0")

    def test_permanent_descriptor(self):
        c = config_mod.GatewayConfig(project_id="p", location="europe-west4", language_codes=["en-US"])
        descriptor = c.permanent_descriptor()

        self.assertEqual(descriptor.name, "projects/p/locations/europe-west4/recognizers/permanent-recognizer")
        self.assertEqual(descriptor.default_language_codes, ("en-US",))
        self.assertEqual(descriptor.display_name, "Permanent Recognizer for Korean STT")


class TestMessages(unittest.TestCase):
    def test_known_locales(self):
        self.assertEqual(messages_for("ko").no_file, "업로드된 파일이 없음")
        self.assertEqual(messages_for("en").no_speech, "no speech recognized")

    def test_unknown_locale(self):
        with self.assertRaises(ValueError):
            messages_for("xx")


if __name__ == "__main__":
    unittest.main()
