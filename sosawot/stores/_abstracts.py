from abc import ABC, abstractmethod
from typing import Iterator, List, Optional, Tuple

from rdflib.term import Node

Triple = Tuple[Node, Node, Node]


class TripleStore(ABC):
    """Read-only access to a set of triples by pattern matching.

    ``None`` is a wildcard in every position of a pattern.
    """

    @abstractmethod
    def match(self, subject: Optional[Node] = None, predicate: Optional[Node] = None,
              obj: Optional[Node] = None) -> List[Triple]:
        """Returns all triples matching the pattern (an empty list if none)."""

    def match_first(self, subject: Optional[Node] = None, predicate: Optional[Node] = None,
                    obj: Optional[Node] = None) -> Optional[Triple]:
        """Returns the first triple matching the pattern or None."""
        matches = self.match(subject, predicate, obj)
        if matches:
            return matches[0]
        return None

    @abstractmethod
    def __iter__(self) -> Iterator[Triple]:
        """Iterates over all triples."""

    @abstractmethod
    def __len__(self) -> int:
        """Number of triples."""
