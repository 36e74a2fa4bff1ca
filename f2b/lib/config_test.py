import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from f2b.lib.config import Settings, env_overrides, load_settings
from f2b.lib.errors import ConfigError


class TestLoadSettings(unittest.TestCase):
    """Tests for settings precedence and validation"""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)
        self.config_file = Path(self.tmpdir.name) / "config.yml"

    def test_defaults_when_nothing_configured(self) -> None:
        settings = load_settings(self.config_file, environ={})

        self.assertEqual(settings, Settings())
        self.assertEqual(settings.client_bin, "fail2ban-client")
        self.assertEqual(settings.sudo, "auto")

    def test_yaml_file(self) -> None:
        self.config_file.write_text("log_file: /tmp/f2b.log\ntimeout: 3\n")

        settings = load_settings(self.config_file, environ={})

        self.assertEqual(settings.log_file, "/tmp/f2b.log")
        self.assertEqual(settings.timeout, 3)

    def test_environment_wins_over_file(self) -> None:
        self.config_file.write_text("timeout: 3\nsudo: always\n")

        settings = load_settings(self.config_file, environ={"F2B_TIMEOUT": "7", "F2B_SUDO": "never"})

        self.assertEqual(settings.timeout, 7)
        self.assertEqual(settings.sudo, "never")

    def test_config_path_from_environment(self) -> None:
        self.config_file.write_text("service_name: fail2ban-custom\n")

        settings = load_settings(environ={"F2B_CONFIG": str(self.config_file)})

        self.assertEqual(settings.service_name, "fail2ban-custom")

    def test_invalid_value(self) -> None:
        with self.assertRaises(ConfigError):
            load_settings(self.config_file, environ={"F2B_SUDO": "sometimes"})

    def test_unknown_key_in_file(self) -> None:
        self.config_file.write_text("colour: blue\n")

        with self.assertRaises(ConfigError):
            load_settings(self.config_file, environ={})

    def test_file_must_be_mapping(self) -> None:
        self.config_file.write_text("- a\n- b\n")

        with self.assertRaises(ConfigError):
            load_settings(self.config_file, environ={})

    @patch.dict("os.environ", {}, clear=True)
    def test_dotenv_in_working_directory(self) -> None:
        workdir = Path(self.tmpdir.name)
        (workdir / ".env").write_text(f"F2B_TIMEOUT=42\nF2B_CONFIG={self.config_file}\n")
        self.config_file.write_text("timeout: 3\nlog_file: /tmp/f2b.log\n")
        self.addCleanup(os.chdir, os.getcwd())
        os.chdir(workdir)

        settings = load_settings()

        self.assertEqual(settings.timeout, 42)
        self.assertEqual(settings.log_file, "/tmp/f2b.log")

    def test_env_overrides_ignores_unrelated(self) -> None:
        overrides = env_overrides({"F2B_LOG_FILE": "/x", "F2B_CONFIG": "/y", "HOME": "/root"})
        self.assertEqual(overrides, {"log_file": "/x"})


if __name__ == "__main__":
    unittest.main()
