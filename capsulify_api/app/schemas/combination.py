"""
Pydantic models for outfit combinations.

Request bodies accept every field as optional so that the service
layer, not the request parser, decides which fields are required: a
missing slot is reported as a 400 validation error with a readable
message.  ``tags`` is left untyped because non-list values are
accepted on create (they are stored as an empty list).
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field


class CombinationPayload(BaseModel):
    """Body of create and update requests."""

    comboName: Optional[str] = Field(None, examples=["Smart casual Friday"])
    top: Optional[str] = Field(None, examples=["white-tee"])
    bottom: Optional[str] = Field(None, examples=["navy-chinos"])
    shoes: Optional[str] = Field(None, examples=["white-sneakers"])
    bag: Optional[str] = Field(None, examples=["tote"])
    dress: Optional[str] = Field(None, examples=["slip-dress"])
    layer: Optional[str] = Field(None, examples=["denim-jacket"])
    tags: Optional[Any] = Field(None, examples=[["Work", "Chic"]])


class CombinationRead(BaseModel):
    """A stored combination as returned by the API.

    ``_id`` and any tag references are rendered as strings.  Garment
    slots are passed through as stored, since documents written outside
    the API may hold sub-documents there.
    """

    id: str = Field(..., alias="_id")
    comboName: Optional[str] = None
    top: Optional[Any] = None
    bottom: Optional[Any] = None
    shoes: Optional[Any] = None
    bag: Optional[Any] = None
    dress: Optional[Any] = None
    layer: Optional[Any] = None
    tags: Optional[List[Any]] = None

    model_config = {
        "populate_by_name": True,
    }


class CombinationList(BaseModel):
    combinations: List[CombinationRead]


class CombinationDetail(BaseModel):
    combinations: CombinationRead


class CombinationWriteResult(BaseModel):
    message: str
    combination: CombinationRead


class MessageResponse(BaseModel):
    message: str
