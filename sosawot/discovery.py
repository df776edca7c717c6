"""Discovery of the observable properties of a feature of interest."""
import dataclasses
import logging
from typing import Dict, List, Optional

import rdflib
from rdflib.term import Node

from .stores import TripleStore
from .utils import DEFAULT_IDENTIFIER_LENGTH, assign_identifiers
from .vocabulary import DEFAULT_VOCABULARY, Vocabulary

logger = logging.getLogger("sosawot")


@dataclasses.dataclass(frozen=True)
class Discovery:
    """Observable properties found for one feature of interest."""
    feature: Node
    properties: Dict[str, Node]
    schemas: Dict[str, Dict]

    def __len__(self):
        return len(self.properties)


def label_of(store: TripleStore, node: Node, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> Optional[str]:
    """Returns the first label of `node` or None."""
    t = store.match_first(node, vocabulary.label, None)
    if t is None:
        return None
    return str(t[2])


_SCALAR = {"type": ["string", "number", "boolean"]}


def property_schema(store: TripleStore, property_node: Node, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> Dict:
    """Data schema of the value returned when reading an observation-backed property.

    The value has a structured ``result``, a scalar ``simpleResult`` or both. A result predicate
    repeated on one observation is returned as a list, a literal ``hasResult`` as a scalar ``result``.
    """
    result = vocabulary.result_field
    simple_result = vocabulary.simple_result_field
    schema = {
        "type": "object",
        "properties": {
            result: {"type": ["object", "array", "string", "number", "boolean"]},
            simple_result: {"anyOf": [dict(_SCALAR), {"type": "array", "items": dict(_SCALAR)}]},
        },
        "anyOf": [
            {"required": [result]},
            {"required": [simple_result]},
        ],
        "readOnly": True,
        "observable": False,
    }
    if isinstance(property_node, rdflib.URIRef):
        schema["observedProperty"] = str(property_node)
    title = label_of(store, property_node, vocabulary)
    if title:
        schema["title"] = title
    return schema


def observed_properties(store: TripleStore, feature: Node, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> List[Node]:
    """Returns the distinct properties observed by observations of `feature`."""
    found = {}
    for observation, _, _ in store.match(None, vocabulary.has_feature_of_interest, feature):
        for _, _, property_node in store.match(observation, vocabulary.observed_property, None):
            found.setdefault(property_node, observation)
    return list(found)


def discover(store: TripleStore,
             feature: Node,
             vocabulary: Vocabulary = DEFAULT_VOCABULARY,
             identifier_length: int = DEFAULT_IDENTIFIER_LENGTH) -> Discovery:
    """Finds all properties observed for `feature` and names them.

    Observations are found via ``hasFeatureOfInterest`` and their properties via ``observedProperty``.
    A property reached by several observations is registered once. A feature without observations
    results in an empty discovery.
    """
    properties = assign_identifiers(observed_properties(store, feature, vocabulary), identifier_length)
    schemas = {name: property_schema(store, node, vocabulary) for name, node in properties.items()}
    logger.debug(f"Discovered {len(properties)} observed properties for feature '{feature}'")
    return Discovery(feature=feature, properties=properties, schemas=schemas)


def find_features(store: TripleStore, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> List[Node]:
    """Returns all nodes typed as feature of interest, sorted by their lexical value."""
    features = {s for s, _, _ in store.match(None, rdflib.RDF.type, vocabulary.feature_of_interest)}
    return sorted(features, key=str)
