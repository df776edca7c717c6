"""Projection of triples to JSON-LD node objects and narrowing to a single property value.

A projected document maps node identifiers to node objects in flattened, expanded JSON-LD form::

    {
        "https://example.org/obs/1": {
            "@id": "https://example.org/obs/1",
            "@type": ["http://www.w3.org/ns/sosa/Observation"],
            "http://www.w3.org/ns/sosa/hasSimpleResult": [{"@value": 22.0}]
        }
    }

Every value of a predicate is kept, repeated predicates accumulate in the value list.
Blank nodes are skolemized, so that every node can be addressed by its identifier when framing.
"""
import asyncio
import copy
import decimal
import logging
from collections import deque
from typing import Any, Dict, Iterable, Optional, Tuple

import rdflib
from pyld import jsonld
from rdflib.namespace import RDF, XSD
from rdflib.term import Node

from .errors import InternalInvariantError
from .stores import Triple, TripleStore
from .vocabulary import DEFAULT_VOCABULARY, Vocabulary

logger = logging.getLogger("sosawot")

Document = Dict[str, Dict[str, Any]]

_SKOLEM_MARKER = "/.well-known/genid/"


def node_id(node: Node) -> str:
    """Identifier of a node in a projected document."""
    if isinstance(node, rdflib.BNode):
        return str(node.skolemize())
    return str(node)


def _is_skolem_id(value: Any) -> bool:
    return isinstance(value, str) and _SKOLEM_MARKER in value


def value_object(node: Node) -> Dict[str, Any]:
    """JSON-LD value (or node reference) object of a triple's object."""
    if not isinstance(node, rdflib.Literal):
        return {"@id": node_id(node)}
    if node.language:
        return {"@value": str(node), "@language": node.language}
    if node.datatype is None or node.datatype == XSD.string:
        return {"@value": str(node)}
    value = node.toPython()
    if isinstance(value, (bool, int, float)):
        return {"@value": value}
    if isinstance(value, decimal.Decimal):
        return {"@value": float(value)}
    return {"@value": str(node), "@type": str(node.datatype)}


def _reachable(store: TripleStore, root: Node) -> Iterable[Triple]:
    """Triples of all subjects reachable from `root`, not following rdf:type."""
    visited = {root}
    queue = deque([root])
    while queue:
        subject = queue.popleft()
        for triple in store.match(subject, None, None):
            yield triple
            _, p, o = triple
            if p != RDF.type and not isinstance(o, rdflib.Literal) and o not in visited:
                visited.add(o)
                queue.append(o)


def project(store: TripleStore, root: Optional[Node] = None) -> Document:
    """Projects the triples of `store` to a document of node objects.

    If `root` is given, only the subjects reachable from it are projected.
    """
    triples = iter(store) if root is None else _reachable(store, root)
    document = {}
    for s, p, o in triples:
        sid = node_id(s)
        node = document.get(sid)
        if node is None:
            node = document[sid] = {"@id": sid}
        if p == RDF.type and not isinstance(o, rdflib.Literal):
            node.setdefault("@type", []).append(node_id(o))
        else:
            node.setdefault(str(p), []).append(value_object(o))
    return document


def _frame_for(node: str, vocabulary: Vocabulary) -> Dict:
    # nodes referenced more than once inside a result are embedded at every reference,
    # circular references stay node references
    return {
        "@id": node,
        "@explicit": True,
        str(vocabulary.has_result): {"@embed": "@always"},
        str(vocabulary.has_simple_result): {},
    }


def _select(framed: Any, node: str) -> Optional[Dict]:
    if isinstance(framed, dict):
        candidates = framed.get("@graph", [framed])
    else:
        candidates = framed
    if isinstance(candidates, dict):
        candidates = [candidates]
    for candidate in candidates:
        if isinstance(candidate, dict) and candidate.get("@id") == node:
            return candidate
    return None


def _scalar(value: Any) -> Any:
    if isinstance(value, list):
        return [_scalar(v) for v in value]
    if isinstance(value, dict) and "@value" in value:
        return value["@value"]
    return value


def _strip_skolem_ids(value: Any) -> Any:
    """Removes skolem ids of embedded blank nodes. A bare node reference keeps its id."""
    if isinstance(value, list):
        return [_strip_skolem_ids(v) for v in value]
    if isinstance(value, dict):
        if set(value) == {"@id"}:
            return value
        return {k: _strip_skolem_ids(v) for k, v in value.items() if not (k == "@id" and _is_skolem_id(v))}
    return value


async def frame_node(document: Document, node: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> Dict:
    """First step of narrowing: frames `document` to the single node `node`.

    Only the result predicates of the node are kept, result nodes are embedded.
    """
    options = {"omitDefault": True, "processingMode": "json-ld-1.1", "embed": "@always"}
    try:
        framed = await asyncio.to_thread(
            jsonld.frame, copy.deepcopy(list(document.values())), _frame_for(node, vocabulary), options
        )
    except jsonld.JsonLdError as e:
        raise InternalInvariantError(f"Framing of node '{node}' failed: {e}") from e
    single = _select(framed, node)
    if single is None:
        raise InternalInvariantError(f"Framing did not yield a node with id '{node}'")
    single.pop("@context", None)
    return single


async def compact_node(single: Dict, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> Dict:
    """Second step of narrowing: compacts a framed node against the vocabulary context.

    Returns a mapping with at most the fields ``result`` and ``simpleResult``. A repeated result
    predicate yields a list, a literal ``hasResult`` yields a scalar ``result``.
    """
    try:
        compacted = await asyncio.to_thread(jsonld.compact, copy.deepcopy(single), {"@context": vocabulary.context()})
    except jsonld.JsonLdError as e:
        raise InternalInvariantError(f"Compaction of node '{single.get('@id')}' failed: {e}") from e
    value = {}
    if vocabulary.result_field in compacted:
        value[vocabulary.result_field] = _strip_skolem_ids(compacted[vocabulary.result_field])
    if vocabulary.simple_result_field in compacted:
        value[vocabulary.simple_result_field] = _scalar(compacted[vocabulary.simple_result_field])
    return value


async def narrow(document: Document, node: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> Tuple[Dict, Dict]:
    """Narrows a projected document to the node `node` and compacts it.

    Returns the framed node and its compacted value.

    Raises
    ------
    InternalInvariantError
        If the document has no node `node` or framing/compaction fails.
    """
    if node not in document:
        raise InternalInvariantError(f"Node '{node}' is not part of the projected document")
    single = await frame_node(document, node, vocabulary)
    compacted = await compact_node(single, vocabulary)
    return single, compacted
