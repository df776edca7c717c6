from typing import Any, Optional


class SosaWotError(Exception):
    """Base class of all errors raised by sosawot."""


class MalformedInputError(SosaWotError):
    """The RDF source could not be parsed. Nothing is exposed from a malformed source."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Could not parse RDF source '{source}': {reason}")


class UnknownPropertyError(SosaWotError, KeyError):
    """The Thing has no property with the given name."""

    def __init__(self, thing_name: str, property_name: str):
        self.thing_name = thing_name
        self.property_name = property_name
        super().__init__(f"Thing '{thing_name}' has no property '{property_name}'")

    def __str__(self):
        return self.args[0]


class NoObservationError(SosaWotError):
    """A managed property has no observation (with a result) in the graph."""

    def __init__(self, property_name: str, property_node: Optional[Any] = None, observation: Optional[Any] = None):
        self.property_name = property_name
        self.property_node = property_node
        self.observation = observation
        if observation is None:
            super().__init__(f"No observation for property {property_name}")
        else:
            super().__init__(f"Latest observation {observation} of property {property_name} has no result")


class UnsupportedOperationError(SosaWotError):
    """The requested interaction is not supported, e.g. writing an observation-backed property."""

    def __init__(self, operation: str, property_name: Optional[str] = None):
        self.operation = operation
        self.property_name = property_name
        msg = f"Operation '{operation}' is not supported"
        if property_name is not None:
            msg += f" for property '{property_name}'"
        super().__init__(msg)


class InternalInvariantError(SosaWotError):
    """Raised when the code reaches a state that resolved data guarantees to be impossible."""


class ThingExistsError(SosaWotError):
    """A Thing with the same name is already registered."""

    def __init__(self, thing_name: str):
        self.thing_name = thing_name
        super().__init__(f"A thing named '{thing_name}' already exists")
