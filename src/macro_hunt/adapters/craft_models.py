"""Typed request and response bodies for the Craft collections API."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class CraftItemProperties(BaseModel):
    """Collection columns for one meal."""

    date: str
    meal_type: str
    calories: int
    protein_g: float
    carbs_g: float
    fat_g: float
    key_nutrients: str
    notes: str


class CraftItem(BaseModel):
    meal_name: str
    properties: CraftItemProperties


class CraftCreateItemsRequest(BaseModel):
    items: list[CraftItem]


class CraftDeleteItemsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ids_to_delete: list[str] = Field(alias="idsToDelete")


class CraftTextBlock(BaseModel):
    type: Literal["text"] = "text"
    markdown: str


class CraftBlockPosition(BaseModel):
    """Where appended blocks land inside a document."""

    model_config = ConfigDict(populate_by_name=True)

    position: Literal["end", "start"] = "end"
    page_id: str = Field(alias="pageId")


class CraftAppendBlocksRequest(BaseModel):
    blocks: list[CraftTextBlock]
    position: CraftBlockPosition


class CraftCreatedItem(BaseModel):
    id: str = ""


class CraftCreateItemsResponse(BaseModel):
    items: list[CraftCreatedItem] = Field(default_factory=list)


def to_json_bytes(model: BaseModel) -> bytes:
    """Serialize a request body using the provider's field names."""
    return model.model_dump_json(by_alias=True).encode("utf-8")
