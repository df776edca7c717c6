import unittest

import rdflib

from sosawot import set_logging_level
from sosawot.utils import assign_identifiers, identifier_for, compute_sha1

set_logging_level('DEBUG')


class TestIdentifiers(unittest.TestCase):

    def test_identifier_for(self):
        self.assertEqual(identifier_for("abc"), "a9993e")
        self.assertEqual(identifier_for("abc", length=10), "a9993e3647")
        self.assertEqual(identifier_for(rdflib.URIRef("abc")), "a9993e")

    def test_identifier_is_deterministic(self):
        node = rdflib.URIRef("https://example.org/temperature")
        self.assertEqual(identifier_for(node), identifier_for(node))
        self.assertEqual(len(identifier_for(node)), 6)
        int(identifier_for(node), 16)

    def test_invalid_length(self):
        with self.assertRaises(ValueError):
            identifier_for("abc", length=0)

    def test_assign_identifiers(self):
        values = [rdflib.URIRef(f"https://example.org/p{i}") for i in range(3)]
        names = assign_identifiers(values + values)
        self.assertEqual(len(names), 3)
        self.assertEqual(sorted(names.values()), sorted(values))
        for name, value in names.items():
            self.assertEqual(name, identifier_for(value))

    def test_assign_identifiers_widens_on_collision(self):
        # 17 values cannot have distinct 1-character hex prefixes
        values = [f"v{i}" for i in range(17)]
        names = assign_identifiers(values, length=1)
        self.assertEqual(len(names), 17)
        self.assertEqual(set(names.values()), set(values))
        self.assertTrue(any(len(name) > 1 for name in names))
        for name, value in names.items():
            self.assertTrue(compute_sha1(value).startswith(name))

    def test_assign_identifiers_is_order_independent(self):
        values = [f"v{i}" for i in range(17)]
        self.assertEqual(assign_identifiers(values, length=1),
                         assign_identifiers(list(reversed(values)), length=1))
