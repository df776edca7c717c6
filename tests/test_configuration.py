import configparser
import logging
import pathlib
import tempfile
import unittest

from sosawot import set_logging_level
from sosawot.configuration import SosaWotConfiguration, _get_default_config, _get_test_config, get_config

set_logging_level('DEBUG')


def _config() -> SosaWotConfiguration:
    parser = configparser.ConfigParser()
    parser["DEFAULT"] = _get_default_config()
    parser["test"] = _get_test_config()
    return SosaWotConfiguration(parser)


class TestConfiguration(unittest.TestCase):

    def test_defaults(self):
        cfg = _config()
        self.assertEqual(cfg.profile, "DEFAULT")
        self.assertEqual(cfg.logging_level, logging.INFO)
        self.assertEqual(cfg.http_host, "127.0.0.1")
        self.assertEqual(cfg.http_port, 8080)
        self.assertEqual(cfg.identifier_length, 6)
        self.assertEqual(cfg.input_format, "turtle")
        self.assertIsNone(cfg.base_url)
        self.assertIn("http_port", cfg)

    def test_select_profile(self):
        cfg = _config()
        cfg.select_profile("test")
        self.assertEqual(cfg.profile, "test")
        self.assertEqual(cfg.http_port, 8081)
        self.assertEqual(cfg.logging_level, logging.DEBUG)
        # values missing in a profile fall back to DEFAULT
        self.assertEqual(cfg.http_host, "127.0.0.1")
        self.assertIn("test", cfg.profiles)
        self.assertIn("Configuration profile: test", str(cfg))

    def test_unknown_profile(self):
        with self.assertRaises(ValueError):
            _config().select_profile("production")

    def test_invalid_values(self):
        cfg = _config()
        cfg._set_config("DEFAULT", "identifier_length", 0)
        with self.assertRaises(ValueError):
            cfg.identifier_length
        cfg._set_config("DEFAULT", "http_port", "eighty")
        with self.assertRaises(ValueError):
            cfg.http_port
        cfg.logging_level = "warning"
        self.assertEqual(cfg.logging_level, "WARNING")

    def test_config_singleton(self):
        cfg1 = get_config()
        cfg2 = get_config()
        self.assertIs(cfg1, cfg2)

    def test_select_profile_without_persisting(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            filename = pathlib.Path(tmpdir) / "sosawot-config.ini"
            parser = configparser.ConfigParser()
            parser["DEFAULT"] = _get_default_config()
            parser["test"] = _get_test_config()
            with open(filename, "w") as f:
                parser.write(f)
            cfg = SosaWotConfiguration(parser, filename=filename)

            cfg.select_profile("test", persist=False)
            self.assertEqual(cfg.http_port, 8081)
            on_disk = configparser.ConfigParser()
            on_disk.read(filename)
            self.assertEqual(on_disk["DEFAULT"]["profile"], "DEFAULT")

            cfg.select_profile("test")
            on_disk.read(filename)
            self.assertEqual(on_disk["DEFAULT"]["profile"], "test")
