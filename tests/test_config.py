import os
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from addon_provider.config import load_settings
from addon_provider.main import build_provider, parse_args


class TestLoadSettings(unittest.TestCase):
    def test_defaults_without_environment(self) -> None:
        with patch.dict(os.environ, {}, clear=True), patch("addon_provider.config.load_dotenv"):
            settings = load_settings()

        self.assertIsNone(settings.github_token)
        self.assertEqual(settings.product_name, "WowUp-Client")
        self.assertEqual(settings.api_url, "https://api.github.com")
        self.assertEqual(settings.max_concurrency, 5)

    def test_environment_overrides(self) -> None:
        env = {
            "GITHUB_TOKEN": "secret",
            "ADDON_PROVIDER_TIMEOUT": "15",
            "ADDON_PROVIDER_MAX_CONCURRENCY": "2",
        }
        with patch.dict(os.environ, env, clear=True), patch("addon_provider.config.load_dotenv"):
            settings = load_settings()

        self.assertEqual(settings.github_token, "secret")
        self.assertEqual(settings.request_timeout, 15.0)
        self.assertEqual(settings.max_concurrency, 2)

        provider = build_provider(settings)
        self.assertEqual(provider.max_concurrency, 2)
        self.assertEqual(provider.gateway.client.headers["Authorization"], "Bearer secret")

    def test_invalid_concurrency_is_rejected(self) -> None:
        with patch.dict(os.environ, {"ADDON_PROVIDER_MAX_CONCURRENCY": "0"}, clear=True), \
                patch("addon_provider.config.load_dotenv"):
            with self.assertRaises(ValidationError):
                load_settings()


class TestParseArgs(unittest.TestCase):
    def test_client_defaults_to_retail(self) -> None:
        args = parse_args(["/octocat/addon"])
        self.assertEqual(args.client, "retail")
        self.assertFalse(args.channels)

    def test_classic_with_channels(self) -> None:
        args = parse_args(["/octocat/addon", "--client", "classic", "--channels"])
        self.assertEqual(args.client, "classic")
        self.assertTrue(args.channels)
