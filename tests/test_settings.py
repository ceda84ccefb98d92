import os
import unittest
from unittest.mock import patch
from pydantic_settings import SettingsConfigDict
from config.settings import Settings

class IsolatedSettings(Settings):
    model_config = SettingsConfigDict(
        env_file=None,  # Don't load any .env files
        extra='ignore',
        case_sensitive=False
    )

class TestSettings(unittest.TestCase):
    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = IsolatedSettings()
            self.assertEqual(settings.LOG_LEVEL, 'INFO')
            self.assertFalse(settings.LOG_JSON)
            self.assertEqual(settings.PROFILES_PATH, 'config/profiles.yaml')

    @patch.dict(os.environ, {
        'LOG_LEVEL': 'debug',
        'LOG_JSON': 'true',
        'PROFILES_PATH': '/etc/connstring/profiles.yaml'
    })
    def test_load_settings_from_env(self):
        settings = IsolatedSettings()
        self.assertEqual(settings.get_log_level(), 'DEBUG')
        self.assertTrue(settings.LOG_JSON)
        self.assertEqual(settings.PROFILES_PATH, '/etc/connstring/profiles.yaml')

if __name__ == '__main__':
    unittest.main()
