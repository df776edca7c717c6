import hashlib
import logging
from typing import Any, Dict, Iterable

logger = logging.getLogger("sosawot")

DEFAULT_IDENTIFIER_LENGTH = 6


def sosawot_print(*args, **kwargs):
    print(" [sosawot]: ", *args, **kwargs)


def compute_sha1(data: str) -> str:
    """Compute the SHA1 checksum of a string."""
    return hashlib.sha1(data.encode("utf-8")).hexdigest()


def identifier_for(value: Any, length: int = DEFAULT_IDENTIFIER_LENGTH) -> str:
    """Returns a short, deterministic identifier for the lexical value of `value`.

    The identifier is the hexadecimal prefix of the SHA1 hash of ``str(value)``. With the default of
    6 characters (24 bit) the probability of a collision reaches ~50 % at around 4,800 distinct values
    (birthday bound); it is below 0.1 % for 180 values. Use a larger `length` for larger graphs.
    """
    if length < 1:
        raise ValueError(f"Identifier length must be positive, got {length}")
    return compute_sha1(str(value))[:length]


def assign_identifiers(values: Iterable[Any], length: int = DEFAULT_IDENTIFIER_LENGTH) -> Dict[str, Any]:
    """Assigns a unique short identifier to every distinct value.

    Values are named in the order of their lexical value, hence the result only depends on the set of values.
    If the prefix of a value is already taken by another value, the shortest longer prefix that is still free
    is used instead. No value is ever dropped.
    """
    names = {}
    for value in sorted(set(values), key=str):
        digest = compute_sha1(str(value))
        name = digest[:length]
        n = length
        while name in names and n < len(digest):
            n += 1
            name = digest[:n]
        if n != length:
            logger.warning(f"Identifier collision for '{value}' and '{names[digest[:length]]}'. "
                           f"Using the longer identifier '{name}'.")
        if name in names:
            raise ValueError(f"Could not assign a unique identifier to '{value}'")
        names[name] = value
    return names
