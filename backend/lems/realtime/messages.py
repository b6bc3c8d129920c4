"""
Named update categories carried on the push channel.

Wire shape: {"name": <category>, "data": <full entity payload>}. Parsing is
keyed on "name"; anything that does not match a known category fails
validation and is left to the receiver to ignore.
"""

from typing import Annotated, Any, Dict, Literal, Union

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, Field, TypeAdapter

from lems.schemas import TeamRead

TEAM_REGISTERED = "teamRegistered"
CV_FORM_CREATED = "cvFormCreated"
CV_FORM_UPDATED = "cvFormUpdated"

# Rooms a client may join inside an event
ROOMS = ("field", "judging", "pit-admin", "audience-display")


class TeamRegistered(BaseModel):
    name: Literal["teamRegistered"] = TEAM_REGISTERED
    data: TeamRead


class CVFormCreated(BaseModel):
    name: Literal["cvFormCreated"] = CV_FORM_CREATED
    data: Dict[str, Any]


class CVFormUpdated(BaseModel):
    name: Literal["cvFormUpdated"] = CV_FORM_UPDATED
    data: Dict[str, Any]


LiveMessage = Annotated[Union[TeamRegistered, CVFormCreated, CVFormUpdated], Field(discriminator="name")]

live_message_adapter: TypeAdapter = TypeAdapter(LiveMessage)


def encode_message(name: str, data: Any) -> Dict[str, Any]:
    return {"name": name, "data": jsonable_encoder(data)}
