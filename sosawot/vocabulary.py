import dataclasses
from types import MappingProxyType
from typing import Dict, Mapping

import rdflib
from rdflib.namespace import OWL, RDF, RDFS, SOSA, SSN, XSD

TD = rdflib.Namespace("http://www.w3.org/ns/td#")


def _default_prefixes() -> Mapping[str, str]:
    return MappingProxyType({
        "rdf": str(RDF),
        "rdfs": str(RDFS),
        "xsd": str(XSD),
        "owl": str(OWL),
        "ssn": str(SSN),
        "sosa": str(SOSA),
        "td": str(TD),
    })


@dataclasses.dataclass(frozen=True)
class Vocabulary:
    """Terms and prefixes used to read the observation graph and to compact property values.

    A vocabulary is immutable and is passed explicitly to discovery, resolution and projection.
    """
    prefixes: Mapping[str, str] = dataclasses.field(default_factory=_default_prefixes)

    feature_of_interest: rdflib.URIRef = SOSA.FeatureOfInterest
    observable_property: rdflib.URIRef = SOSA.ObservableProperty
    observation: rdflib.URIRef = SOSA.Observation

    has_feature_of_interest: rdflib.URIRef = SOSA.hasFeatureOfInterest
    observed_property: rdflib.URIRef = SOSA.observedProperty
    result_time: rdflib.URIRef = SOSA.resultTime
    has_result: rdflib.URIRef = SOSA.hasResult
    has_simple_result: rdflib.URIRef = SOSA.hasSimpleResult
    label: rdflib.URIRef = RDFS.label

    result_field: str = "result"
    simple_result_field: str = "simpleResult"

    def __post_init__(self):
        if not isinstance(self.prefixes, MappingProxyType):
            object.__setattr__(self, "prefixes", MappingProxyType(dict(self.prefixes)))

    def with_prefixes(self, **prefixes: str) -> "Vocabulary":
        """Returns a copy with additional (or replaced) prefixes."""
        return dataclasses.replace(self, prefixes={**self.prefixes, **prefixes})

    def context(self) -> Dict:
        """Returns a new JSON-LD context used to compact a property value.

        ``result`` is kept as a nested node object, ``simpleResult`` as a plain value.
        """
        ctx = dict(self.prefixes)
        ctx[self.result_field] = {"@id": str(self.has_result)}
        ctx[self.simple_result_field] = {"@id": str(self.has_simple_result)}
        return ctx


DEFAULT_VOCABULARY = Vocabulary()
