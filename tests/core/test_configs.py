"""
Tests for core/configs.py - settings loaded from the environment and .env.
"""

import logging
import shutil
import tempfile
import unittest
from pathlib import Path

from agent_browser.core.configs import Settings, load_settings


class TestLoadSettings(unittest.TestCase):
    """Test cases for load_settings."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.env_file = Path(self.temp_dir) / ".env"
        self.missing = Path(self.temp_dir) / "missing.env"

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_defaults_with_empty_environment(self):
        settings = load_settings(environ={}, env_file=self.missing)

        self.assertEqual(settings.session, "default")
        self.assertEqual(settings.socket_dir, Path(tempfile.gettempdir()))
        self.assertIsNone(settings.daemon_path)
        self.assertEqual(settings.node_binary, "node")
        self.assertEqual(settings.log_level, logging.WARNING)
        self.assertFalse(settings.no_color)

    def test_timing_constants(self):
        settings = Settings()
        self.assertEqual(settings.read_timeout, 30.0)
        self.assertEqual(settings.write_timeout, 5.0)
        self.assertEqual(settings.poll_interval, 0.1)
        self.assertEqual(settings.poll_attempts, 50)

    def test_environment_values(self):
        environ = {
            "AGENT_BROWSER_SESSION": "work",
            "AGENT_BROWSER_SOCKET_DIR": self.temp_dir,
            "AGENT_BROWSER_DAEMON_PATH": "/opt/ab/daemon.js",
            "AGENT_BROWSER_NODE": "bun",
            "AGENT_BROWSER_LOG_LEVEL": "debug",
            "NO_COLOR": "1",
        }
        settings = load_settings(environ=environ, env_file=self.missing)

        self.assertEqual(settings.session, "work")
        self.assertEqual(settings.socket_dir, Path(self.temp_dir))
        self.assertEqual(settings.daemon_path, Path("/opt/ab/daemon.js"))
        self.assertEqual(settings.node_binary, "bun")
        self.assertEqual(settings.log_level, logging.DEBUG)
        self.assertTrue(settings.no_color)

    def test_blank_values_fall_back_to_defaults(self):
        settings = load_settings(
            environ={"AGENT_BROWSER_SESSION": "  ", "AGENT_BROWSER_NODE": ""},
            env_file=self.missing,
        )
        self.assertEqual(settings.session, "default")
        self.assertEqual(settings.node_binary, "node")

    def test_env_file_is_read(self):
        self.env_file.write_text("AGENT_BROWSER_SESSION=fromfile\n")
        settings = load_settings(environ={}, env_file=self.env_file)
        self.assertEqual(settings.session, "fromfile")

    def test_environment_overrides_env_file(self):
        self.env_file.write_text(
            "AGENT_BROWSER_SESSION=fromfile\nAGENT_BROWSER_NODE=bun\n"
        )
        settings = load_settings(
            environ={"AGENT_BROWSER_SESSION": "fromenv"}, env_file=self.env_file
        )
        self.assertEqual(settings.session, "fromenv")
        self.assertEqual(settings.node_binary, "bun")

    def test_blank_environment_value_keeps_env_file_value(self):
        self.env_file.write_text(
            "AGENT_BROWSER_SESSION=fromfile\nAGENT_BROWSER_NODE=bun\n"
        )
        settings = load_settings(
            environ={"AGENT_BROWSER_SESSION": "", "AGENT_BROWSER_NODE": "  "},
            env_file=self.env_file,
        )
        self.assertEqual(settings.session, "fromfile")
        self.assertEqual(settings.node_binary, "bun")

    def test_daemon_env_is_the_process_environment(self):
        self.env_file.write_text(f"AGENT_BROWSER_SOCKET_DIR={self.temp_dir}\n")
        environ = {"PATH": "/usr/bin", "AGENT_BROWSER_SESSION": "work"}
        settings = load_settings(environ=environ, env_file=self.env_file)

        self.assertEqual(settings.daemon_env, environ)
        self.assertEqual(settings.socket_dir, Path(self.temp_dir))

    def test_settings_stay_hashable(self):
        settings = load_settings(environ={"PATH": "/usr/bin"}, env_file=self.missing)
        self.assertEqual(settings, Settings())
        hash(settings)

    def test_invalid_log_level_falls_back_to_warning(self):
        settings = load_settings(
            environ={"AGENT_BROWSER_LOG_LEVEL": "chatty"}, env_file=self.missing
        )
        self.assertEqual(settings.log_level, logging.WARNING)

    def test_numeric_log_level(self):
        settings = load_settings(
            environ={"AGENT_BROWSER_LOG_LEVEL": "10"}, env_file=self.missing
        )
        self.assertEqual(settings.log_level, 10)


if __name__ == "__main__":
    unittest.main()
