import logging
from typing import Any, Dict, Optional

from rdflib.term import Node

from .discovery import Discovery, discover
from .errors import InternalInvariantError, NoObservationError, UnsupportedOperationError
from .projection import narrow, node_id, project
from .resolver import resolve_latest
from .runtime import ExposedThing
from .stores import TripleStore
from .utils import DEFAULT_IDENTIFIER_LENGTH
from .vocabulary import DEFAULT_VOCABULARY, Vocabulary

logger = logging.getLogger("sosawot")


class ObservationThing(ExposedThing):
    """Thing exposing the observed properties of one feature of interest.

    Reading a managed property returns the latest observation of it as ``{"result": ...}`` and/or
    ``{"simpleResult": ...}``. The Thing holds a reference to the (read-only) store, it does not copy
    triples. Properties are read-only.
    """

    def __init__(self,
                 name: str,
                 store: TripleStore,
                 feature: Node,
                 vocabulary: Vocabulary = DEFAULT_VOCABULARY,
                 identifier_length: int = DEFAULT_IDENTIFIER_LENGTH,
                 title: Optional[str] = None):
        super().__init__(name, title=title, description=f"Observations of {feature}")
        self.store = store
        self.feature = feature
        self.vocabulary = vocabulary
        self.identifier_length = identifier_length
        self._observable_properties: Dict[str, Node] = {}

    @property
    def observable_properties(self) -> Dict[str, Node]:
        """Property nodes by property name."""
        return dict(self._observable_properties)

    def initialize(self) -> Discovery:
        """Discovers the observed properties of the feature and registers them."""
        discovery = discover(self.store, self.feature, self.vocabulary, self.identifier_length)
        for name, property_node in discovery.properties.items():
            if name in self._observable_properties:
                if self._observable_properties[name] != property_node:
                    raise ValueError(f"Thing '{self.name}' was initialized from a different graph")
                continue
            self.add_property(name, discovery.schemas[name])
            self._observable_properties[name] = property_node
        logger.debug(f"Thing '{self.name}' exposes {len(self._observable_properties)} observed properties")
        return discovery

    async def read_property(self, name: str) -> Any:
        property_node = self._observable_properties.get(name)
        if property_node is None:
            return await super().read_property(name)
        observation = resolve_latest(self.store, property_node, name=name, vocabulary=self.vocabulary)
        document = project(self.store, root=observation)
        try:
            _, value = await narrow(document, node_id(observation), self.vocabulary)
        except InternalInvariantError:
            logger.error(f"Could not narrow observation '{observation}' of property '{name}' "
                         f"of thing '{self.name}'", exc_info=True)
            raise
        if not value:
            logger.warning(f"Latest observation '{observation}' of property '{name}' has no result")
            raise NoObservationError(name, property_node, observation)
        return value

    async def write_property(self, name: str, value: Any) -> None:
        # TODO: writing could add a new sosa:Observation once the store supports updates
        raise UnsupportedOperationError("writeProperty", name)
