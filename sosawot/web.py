"""HTTP binding of the exposed Things (FastAPI)."""
import logging
from typing import Any, Optional

from fastapi import Body, FastAPI, HTTPException

from . import __version__
from .errors import (
    InternalInvariantError,
    NoObservationError,
    UnknownPropertyError,
    UnsupportedOperationError,
)
from .runtime import ExposedThing, Servient

logger = logging.getLogger("sosawot")


def create_app(servient: Servient, base_url: Optional[str] = None) -> FastAPI:
    """Creates the web application serving the Things of `servient`."""
    app = FastAPI(title="sosawot", version=__version__)

    def _get_thing(thing_name: str) -> ExposedThing:
        try:
            return servient.get_thing(thing_name)
        except KeyError:
            raise HTTPException(status_code=404, detail=f"Thing '{thing_name}' not found")

    @app.get("/")
    async def list_things():
        """Thing Descriptions of all exposed Things."""
        return [thing.describe(base_url).to_dict() for thing in servient.things.values()]

    @app.get("/{thing_name}")
    async def get_thing_description(thing_name: str):
        return _get_thing(thing_name).describe(base_url).to_dict()

    @app.get("/{thing_name}/properties/{property_name}")
    async def read_property(thing_name: str, property_name: str):
        thing = _get_thing(thing_name)
        try:
            return await thing.read_property(property_name)
        except UnknownPropertyError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except NoObservationError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except InternalInvariantError as e:
            logger.error(f"Reading '{property_name}' of thing '{thing_name}' failed: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    @app.put("/{thing_name}/properties/{property_name}", status_code=204)
    async def write_property(thing_name: str, property_name: str, value: Any = Body(...)):
        thing = _get_thing(thing_name)
        try:
            await thing.write_property(property_name, value)
        except UnknownPropertyError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except UnsupportedOperationError as e:
            raise HTTPException(status_code=405, detail=str(e))

    return app
