"""Minimal Thing exposition runtime.

A :class:`Servient` keeps the exposed Things of a process. An :class:`ExposedThing` owns named properties,
each with a data schema, and implements the default property interactions: reading returns the stored value,
writing replaces it. Subclasses provide their own values by overriding :meth:`ExposedThing.read_property`
and :meth:`ExposedThing.write_property` and delegating to the default implementation for properties they do
not manage.
"""
import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional

from .errors import ThingExistsError, UnknownPropertyError, UnsupportedOperationError
from .models import Form, PropertyAffordance, ThingDescription

logger = logging.getLogger("sosawot")


class ExposedThing:

    def __init__(self, name: str, title: Optional[str] = None, description: Optional[str] = None):
        self.name = name
        self.title = title or name
        self.description = description
        self._properties: Dict[str, Dict] = {}
        self._values: Dict[str, Any] = {}

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.name} (n_properties={len(self._properties)})>"

    @property
    def properties(self) -> Mapping[str, Dict]:
        """Data schemas of the properties by name."""
        return MappingProxyType(self._properties)

    def add_property(self, name: str, schema: Optional[Dict] = None, value: Any = None) -> "ExposedThing":
        if name in self._properties:
            raise ValueError(f"Thing '{self.name}' already has a property '{name}'")
        self._properties[name] = dict(schema or {})
        self._values[name] = value
        logger.debug(f"Added property '{name}' to thing '{self.name}'")
        return self

    async def read_property(self, name: str) -> Any:
        if name not in self._properties:
            raise UnknownPropertyError(self.name, name)
        return self._values[name]

    async def write_property(self, name: str, value: Any) -> None:
        if name not in self._properties:
            raise UnknownPropertyError(self.name, name)
        if self._properties[name].get("readOnly", False):
            raise UnsupportedOperationError("writeProperty", name)
        self._values[name] = value

    def describe(self, base_url: Optional[str] = None) -> ThingDescription:
        """Returns the Thing Description. Form hrefs are relative unless `base_url` is given."""
        base = f"{base_url.rstrip('/')}/" if base_url else ""
        properties = {}
        for name, schema in self._properties.items():
            ops = ["readproperty"] if schema.get("readOnly", False) else ["readproperty", "writeproperty"]
            properties[name] = PropertyAffordance(
                **schema,
                forms=[Form(href=f"{base}{self.name}/properties/{name}", op=ops)]
            )
        return ThingDescription(
            id=f"{base}{self.name}" if base else None,
            title=self.title,
            description=self.description,
            properties=properties
        )


class Servient:
    """Registry of the exposed Things of a process."""

    def __init__(self):
        self._things: Dict[str, ExposedThing] = {}

    def __repr__(self):
        return f"<{self.__class__.__name__} (n_things={len(self._things)})>"

    @property
    def things(self) -> Mapping[str, ExposedThing]:
        return MappingProxyType(self._things)

    async def create_thing(self, name: str, factory: Callable[..., ExposedThing] = ExposedThing,
                           **kwargs) -> ExposedThing:
        """Creates a Thing with `factory` and registers it."""
        if name in self._things:
            raise ThingExistsError(name)
        return self.add_thing(factory(name, **kwargs))

    def add_thing(self, thing: ExposedThing) -> ExposedThing:
        if thing.name in self._things:
            raise ThingExistsError(thing.name)
        self._things[thing.name] = thing
        logger.debug(f"Exposed thing '{thing.name}'")
        return thing

    def get_thing(self, name: str) -> ExposedThing:
        try:
            return self._things[name]
        except KeyError:
            raise KeyError(f"No thing named '{name}'")
