"""SOSA/SSN observations exposed as Thing properties.

sosawot loads an RDF graph of sensor observations (SOSA/SSN ontology) and exposes every feature of interest
as a Thing. Each property observed for a feature becomes a readable property of that Thing. Reading it returns
the most recent observation of the property, framed and compacted to a small JSON representation with the
fields ``result`` and/or ``simpleResult``. Consumers do not need to know RDF or SPARQL.

The graph is loaded once and is read-only for the lifetime of the process.
"""
import logging
import pathlib
from logging.handlers import RotatingFileHandler
from typing import Union

import appdirs

__this_dir__ = pathlib.Path(__file__).parent

from ._version import __version__

USER_LOG_DIR = pathlib.Path(appdirs.user_log_dir('sosawot', version=__version__))
USER_LOG_DIR.mkdir(parents=True, exist_ok=True)

DEFAULT_LOGGING_LEVEL = logging.INFO
_formatter = logging.Formatter(
    '%(asctime)s,%(msecs)d %(levelname)-8s [%(filename)s:%(lineno)d] %(message)s',
    datefmt='%Y-%m-%d_%H:%M:%S')

_stream_handler = logging.StreamHandler()
_stream_handler.setLevel(DEFAULT_LOGGING_LEVEL)
_stream_handler.setFormatter(_formatter)

_file_handler = RotatingFileHandler(USER_LOG_DIR / 'sosawot.log', maxBytes=5_000_000, backupCount=2)
_file_handler.setLevel(logging.DEBUG)  # log everything to file!
_file_handler.setFormatter(_formatter)

logger = logging.getLogger("sosawot")
logger.setLevel(DEFAULT_LOGGING_LEVEL)
logger.addHandler(_stream_handler)
logger.addHandler(_file_handler)


def set_logging_level(level: Union[int, str]):
    """Set the log level."""
    _logger = logging.getLogger("sosawot")
    _logger.setLevel(level)
    _stream_handler.setLevel(level)
    return _logger.level


from .errors import (
    SosaWotError,
    MalformedInputError,
    UnknownPropertyError,
    NoObservationError,
    UnsupportedOperationError,
    InternalInvariantError,
    ThingExistsError,
)
from .vocabulary import Vocabulary, DEFAULT_VOCABULARY
from .stores import RDFFileStore
from .discovery import discover, find_features
from .resolver import resolve_latest
from .projection import project, narrow
from .runtime import Servient, ExposedThing
from .thing import ObservationThing
from .application import expose_features, expose_file

__all__ = [
    '__version__',
    'set_logging_level',
    'SosaWotError',
    'MalformedInputError',
    'UnknownPropertyError',
    'NoObservationError',
    'UnsupportedOperationError',
    'InternalInvariantError',
    'ThingExistsError',
    'Vocabulary',
    'DEFAULT_VOCABULARY',
    'RDFFileStore',
    'discover',
    'find_features',
    'resolve_latest',
    'project',
    'narrow',
    'Servient',
    'ExposedThing',
    'ObservationThing',
    'expose_features',
    'expose_file',
]
