"""Resolution of the most recent observation of a property."""
import datetime
import logging
from typing import Optional

import rdflib
from rdflib.term import Node

from .errors import NoObservationError
from .stores import TripleStore
from .vocabulary import DEFAULT_VOCABULARY, Vocabulary

logger = logging.getLogger("sosawot")


def _as_utc(dt: datetime.datetime) -> datetime.datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=datetime.timezone.utc)
    return dt.astimezone(datetime.timezone.utc)


def parse_result_time(term: Optional[Node]) -> Optional[datetime.datetime]:
    """Parses a result time into a timezone aware (UTC) datetime.

    Naive timestamps are assumed to be UTC, dates are taken at midnight. Returns None if the term is
    missing or cannot be parsed.
    """
    if term is None:
        return None
    if isinstance(term, rdflib.Literal):
        value = term.toPython()
        if isinstance(value, datetime.datetime):
            return _as_utc(value)
        if isinstance(value, datetime.date):
            return datetime.datetime.combine(value, datetime.time(), tzinfo=datetime.timezone.utc)
    lexical = str(term).strip()
    if lexical.endswith(("Z", "z")):
        lexical = lexical[:-1] + "+00:00"
    try:
        return _as_utc(datetime.datetime.fromisoformat(lexical))
    except ValueError:
        logger.warning(f"Could not parse result time '{term}'")
        return None


def resolve_latest(store: TripleStore,
                   property_node: Node,
                   name: Optional[str] = None,
                   vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> Node:
    """Returns the observation of `property_node` with the greatest result time.

    On equal result times the first observation encountered wins. Observations without a (parsable) result
    time rank below every observation with one.

    Raises
    ------
    NoObservationError
        If no observation of the property exists.
    """
    observation = None
    latest = None
    for candidate, _, _ in store.match(None, vocabulary.observed_property, property_node):
        t = store.match_first(candidate, vocabulary.result_time, None)
        result_time = parse_result_time(t[2] if t else None)
        if observation is None:
            observation, latest = candidate, result_time
        elif result_time is not None and (latest is None or result_time > latest):
            observation, latest = candidate, result_time
    if observation is None:
        raise NoObservationError(name or str(property_node), property_node)
    logger.debug(f"Latest observation of '{name or property_node}' is '{observation}' ({latest})")
    return observation
