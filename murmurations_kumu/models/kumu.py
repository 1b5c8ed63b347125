from typing import Any, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


class KumuElement(BaseModel):
    """A Kumu element built from a Murmurations organization profile.

    Values are passed through from the upstream profile unchanged.
    """

    id: Optional[Any] = None
    label: Optional[Any] = Field(None, description="Organization name")
    description: Optional[Any] = None
    image: Optional[Any] = None
    location: Optional[Any] = Field(None, description="Full address")
    mission: Optional[Any] = None
    url: Optional[Any] = Field(None, description="Primary URL")
    type: Literal["organization"] = "organization"


class KumuConnection(BaseModel):
    from_: Optional[Any] = Field(None, alias="from", description="Label of the related element")
    to: Optional[Any] = Field(None, description="Label of the origin element")

    model_config = ConfigDict(populate_by_name=True)


class KumuMap(BaseModel):
    elements: List[KumuElement]
    connections: List[KumuConnection]
    loops: List[Any] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    error: str
