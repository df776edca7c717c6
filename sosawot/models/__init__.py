from .td import Form, PropertyAffordance, ThingDescription, TD_CONTEXT

__all__ = [
    "Form",
    "PropertyAffordance",
    "ThingDescription",
    "TD_CONTEXT",
]
