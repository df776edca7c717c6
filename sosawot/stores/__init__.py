from ._abstracts import TripleStore, Triple
from .rdffilestore import RDFFileStore

__all__ = [
    "TripleStore",
    "Triple",
    "RDFFileStore",
]
