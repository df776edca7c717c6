import pathlib
import unittest

import rdflib

from sosawot import set_logging_level
from sosawot.discovery import discover, find_features, observed_properties, property_schema
from sosawot.stores import RDFFileStore
from sosawot.utils import identifier_for

set_logging_level('DEBUG')

__this_dir__ = pathlib.Path(__file__).parent

EX = rdflib.Namespace("https://example.org/")


class TestDiscovery(unittest.TestCase):

    def setUp(self):
        self.store = RDFFileStore.from_file(__this_dir__ / "data" / "observations.ttl")

    def test_find_features(self):
        self.assertEqual(find_features(self.store), [EX.garden, EX.room])

    def test_discover(self):
        discovery = discover(self.store, EX.room)
        self.assertEqual(discovery.feature, EX.room)
        self.assertEqual(len(discovery), 2)
        self.assertEqual(discovery.properties, {
            identifier_for(EX.temperature): EX.temperature,
            identifier_for(EX.humidity): EX.humidity,
        })
        self.assertEqual(set(discovery.schemas), set(discovery.properties))

    def test_properties_are_deduplicated(self):
        # ex:temperature is observed by ex:o1 and ex:o2
        self.assertEqual(sorted(observed_properties(self.store, EX.room)), [EX.humidity, EX.temperature])

    def test_discover_is_deterministic(self):
        d1 = discover(self.store, EX.room)
        d2 = discover(self.store, EX.room)
        self.assertEqual(d1.properties, d2.properties)
        self.assertEqual(d1.schemas, d2.schemas)

    def test_feature_without_observations(self):
        discovery = discover(self.store, EX.garden)
        self.assertEqual(discovery.properties, {})
        self.assertEqual(discovery.schemas, {})
        self.assertEqual(discover(self.store, EX.unknown).properties, {})

    def test_identifier_length(self):
        discovery = discover(self.store, EX.room, identifier_length=12)
        for name in discovery.properties:
            self.assertEqual(len(name), 12)

    def test_schema(self):
        schema = property_schema(self.store, EX.temperature)
        self.assertEqual(schema["type"], "object")
        self.assertEqual(schema["anyOf"], [{"required": ["result"]}, {"required": ["simpleResult"]}])
        self.assertEqual(schema["properties"]["result"]["type"], ["object", "array", "string", "number", "boolean"])
        scalar = {"type": ["string", "number", "boolean"]}
        self.assertEqual(schema["properties"]["simpleResult"],
                         {"anyOf": [scalar, {"type": "array", "items": scalar}]})
        self.assertTrue(schema["readOnly"])
        self.assertEqual(schema["title"], "Air temperature")
        self.assertEqual(schema["observedProperty"], str(EX.temperature))

        schema = property_schema(self.store, EX.humidity)
        self.assertNotIn("title", schema)
