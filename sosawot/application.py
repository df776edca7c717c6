import logging
import pathlib
from typing import List, Optional, Union

from .discovery import find_features, label_of
from .runtime import Servient
from .stores import RDFFileStore, TripleStore
from .thing import ObservationThing
from .utils import DEFAULT_IDENTIFIER_LENGTH, assign_identifiers
from .vocabulary import DEFAULT_VOCABULARY, Vocabulary

logger = logging.getLogger("sosawot")


async def expose_features(servient: Servient,
                          store: TripleStore,
                          vocabulary: Vocabulary = DEFAULT_VOCABULARY,
                          identifier_length: int = DEFAULT_IDENTIFIER_LENGTH) -> List[ObservationThing]:
    """Exposes one Thing per feature of interest of `store`.

    A Thing is named by the short identifier of its feature and titled by the feature's label, if any.
    """
    things = []
    features = assign_identifiers(find_features(store, vocabulary), identifier_length)
    for name, feature in features.items():
        thing = await servient.create_thing(
            name,
            factory=ObservationThing,
            store=store,
            feature=feature,
            vocabulary=vocabulary,
            identifier_length=identifier_length,
            title=label_of(store, feature, vocabulary)
        )
        thing.initialize()
        things.append(thing)
    logger.info(f"Exposed {len(things)} things")
    return things


async def expose_file(servient: Servient,
                      filename: Union[str, pathlib.Path],
                      format: Optional[str] = None,
                      vocabulary: Vocabulary = DEFAULT_VOCABULARY,
                      identifier_length: int = DEFAULT_IDENTIFIER_LENGTH) -> List[ObservationThing]:
    """Loads an RDF file and exposes its features of interest.

    The file is parsed completely before any Thing is created. A malformed file raises
    :class:`~sosawot.errors.MalformedInputError` and leaves `servient` untouched.
    """
    store = RDFFileStore.from_file(filename, format=format)
    return await expose_features(servient, store, vocabulary, identifier_length)
