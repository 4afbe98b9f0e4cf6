import os
import unittest
from unittest.mock import patch

from gestao_scouter.config import Settings, configure_logging, get_settings


class SettingsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings.from_env()
        self.assertEqual(24, settings.whatsapp_window_hours)
        self.assertEqual(5000, settings.live_preview_threshold)
        self.assertEqual((1, 119), (settings.age_min, settings.age_max))
        self.assertEqual("INFO", settings.log_level)

    def test_reads_environment(self) -> None:
        env = {"WHATSAPP_WINDOW_HOURS": "72", "LIVE_PREVIEW_THRESHOLD": "100", "LOG_LEVEL": "debug"}
        with patch.dict(os.environ, env, clear=True):
            settings = Settings.from_env()
        self.assertEqual(72, settings.whatsapp_window_hours)
        self.assertEqual(100, settings.live_preview_threshold)
        self.assertEqual("DEBUG", settings.log_level)

    def test_invalid_values(self) -> None:
        for env in (
            {"WHATSAPP_WINDOW_HOURS": "abc"},
            {"WHATSAPP_WINDOW_HOURS": "0"},
            {"AGE_MIN": "50", "AGE_MAX": "10"},
            {"WINDOW_PROACTIVE_HOURS": "-1"},
            {"LIVE_PREVIEW_THRESHOLD": "-5"},
        ):
            with patch.dict(os.environ, env, clear=True):
                with self.assertRaises(ValueError):
                    Settings.from_env()

    def test_get_settings_is_cached(self) -> None:
        get_settings.cache_clear()
        try:
            self.assertIs(get_settings(), get_settings())
        finally:
            get_settings.cache_clear()

    def test_configure_logging_uses_level(self) -> None:
        with patch("gestao_scouter.config.logging.basicConfig") as basic_config:
            configure_logging(Settings(log_level="DEBUG"))
        self.assertEqual("DEBUG", basic_config.call_args.kwargs["level"])


if __name__ == "__main__":
    unittest.main()
