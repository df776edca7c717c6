import logging
import pathlib
from typing import Iterator, List, Optional, Union

import rdflib
from rdflib.term import Node

from ._abstracts import TripleStore, Triple
from ..errors import MalformedInputError

logger = logging.getLogger("sosawot")

_FORMATS_BY_SUFFIX = {
    ".ttl": "turtle",
    ".turtle": "turtle",
    ".nt": "nt",
    ".n3": "n3",
    ".jsonld": "json-ld",
    ".json-ld": "json-ld",
    ".json": "json-ld",
    ".rdf": "xml",
    ".xml": "xml",
}


def guess_format(filename: Union[str, pathlib.Path]) -> str:
    suffix = pathlib.Path(filename).suffix.lower()
    try:
        return _FORMATS_BY_SUFFIX[suffix]
    except KeyError:
        raise ValueError(f"File type {suffix} not supported. Expected one of {sorted(_FORMATS_BY_SUFFIX)}")


class RDFFileStore(TripleStore):
    """Read-only triple store holding one in-memory rdflib graph.

    The graph is parsed completely before the store exists. If parsing fails, a
    :class:`~sosawot.errors.MalformedInputError` is raised and no (partial) store is created.
    """

    def __init__(self, graph: rdflib.Graph, source: Optional[str] = None):
        self._graph = graph
        self.source = source

    def __repr__(self):
        return f"<{self.__class__.__name__} (source={self.source}, n_triples={len(self)})>"

    @classmethod
    def from_file(cls, filename: Union[str, pathlib.Path], format: Optional[str] = None) -> "RDFFileStore":
        filename = pathlib.Path(filename)
        if not filename.exists():
            raise FileNotFoundError(f"File {filename} not found.")
        if format is None:
            format = guess_format(filename)
        logger.debug(f"Parsing '{filename.resolve().absolute()}' as {format}...")
        text = filename.read_text(encoding="utf-8")
        return cls._parse(text, format, source=str(filename))

    @classmethod
    def from_text(cls, text: str, format: str = "turtle") -> "RDFFileStore":
        return cls._parse(text, format, source="<text>")

    @classmethod
    def _parse(cls, text: str, format: str, source: str) -> "RDFFileStore":
        g = rdflib.Graph()
        try:
            g.parse(data=text, format=format)
        except Exception as e:
            logger.critical(f"Could not parse '{source}'. Orig. error message: '{e}'")
            raise MalformedInputError(source, str(e)) from e
        logger.debug(f"Successfully parsed {len(g)} triples from '{source}'.")
        return cls(g, source=source)

    def match(self, subject: Optional[Node] = None, predicate: Optional[Node] = None,
              obj: Optional[Node] = None) -> List[Triple]:
        return list(self._graph.triples((subject, predicate, obj)))

    def match_first(self, subject: Optional[Node] = None, predicate: Optional[Node] = None,
                    obj: Optional[Node] = None) -> Optional[Triple]:
        return next(iter(self._graph.triples((subject, predicate, obj))), None)

    def __iter__(self) -> Iterator[Triple]:
        return iter(self._graph.triples((None, None, None)))

    def __len__(self) -> int:
        return len(self._graph)
