from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

TD_CONTEXT = "https://www.w3.org/2019/wot/td/v1"


class Form(BaseModel):
    """Describes how an interaction is performed over a transport."""
    href: str
    contentType: str = Field(default="application/json")
    op: List[str] = Field(default_factory=list)


class PropertyAffordance(BaseModel):
    """A property of a Thing: its data schema plus the forms to access it.

    Additional data schema keywords (``type``, ``anyOf``, ...) are kept as extra fields.
    """
    model_config = ConfigDict(extra="allow")

    title: Optional[str] = None
    description: Optional[str] = None
    readOnly: bool = False
    writeOnly: bool = False
    observable: bool = False
    forms: List[Form] = Field(default_factory=list)


class ThingDescription(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    context: str = Field(default=TD_CONTEXT, alias="@context")
    id: Optional[str] = None
    title: str
    description: Optional[str] = None
    properties: Dict[str, PropertyAffordance] = Field(default_factory=dict)

    def to_dict(self) -> Dict:
        return self.model_dump(by_alias=True, exclude_none=True)
