import json
import pathlib
import unittest
from unittest import mock

import rdflib
from click.testing import CliRunner

from sosawot import __version__
from sosawot import set_logging_level
from sosawot.cli import cli
from sosawot.configuration import get_config
from sosawot.errors import InternalInvariantError
from sosawot.utils import identifier_for

set_logging_level('DEBUG')

__this_dir__ = pathlib.Path(__file__).parent

EX = rdflib.Namespace("https://example.org/")

OBSERVATIONS = str(__this_dir__ / "data" / "observations.ttl")
MALFORMED = str(__this_dir__ / "data" / "malformed.ttl")


class TestCLI(unittest.TestCase):

    def setUp(self):
        self.runner = CliRunner()

    def test_version(self):
        result = self.runner.invoke(cli, ["--version"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn(__version__, result.output)

    def test_things(self):
        result = self.runner.invoke(cli, ["things", OBSERVATIONS])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn(f"{identifier_for(EX.room)}: Room 101", result.output)
        self.assertIn(f" > {identifier_for(EX.temperature)}: {EX.temperature}", result.output)

    def test_read(self):
        result = self.runner.invoke(cli, ["read", OBSERVATIONS, identifier_for(EX.room),
                                          identifier_for(EX.temperature)])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(json.loads(result.output), {"simpleResult": 22.0})

    def test_read_unknown(self):
        result = self.runner.invoke(cli, ["read", OBSERVATIONS, identifier_for(EX.room), "unknown"])
        self.assertEqual(result.exit_code, 1)
        result = self.runner.invoke(cli, ["read", OBSERVATIONS, "unknown", "unknown"])
        self.assertEqual(result.exit_code, 1)

    def test_malformed(self):
        result = self.runner.invoke(cli, ["things", MALFORMED])
        self.assertEqual(result.exit_code, 1)

    def test_missing_file_argument(self):
        result = self.runner.invoke(cli, ["serve"])
        self.assertEqual(result.exit_code, 2)
        self.assertIn("Usage", result.output)

    def test_info(self):
        result = self.runner.invoke(cli, ["info"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Configuration profile", result.output)

    def test_read_internal_error(self):
        with mock.patch("sosawot.thing.narrow", side_effect=InternalInvariantError("framing failed")):
            result = self.runner.invoke(cli, ["read", OBSERVATIONS, identifier_for(EX.room),
                                              identifier_for(EX.temperature)])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("framing failed", result.output)

    def test_profile_is_not_persisted(self):
        cfg = get_config()
        previous = cfg.profile
        with open(cfg.filename) as f:
            before = f.read()
        try:
            result = self.runner.invoke(cli, ["--profile", "test", "info"])
            self.assertEqual(result.exit_code, 0, result.output)
            self.assertIn("Configuration profile: test", result.output)
            with open(cfg.filename) as f:
                self.assertEqual(f.read(), before)
        finally:
            cfg.select_profile(previous, persist=False)
