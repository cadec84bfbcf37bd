from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ItemBase(BaseModel):
    name: str
    description: str = ""


class ItemUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class Item(ItemBase):
    id: int
    photo: Optional[str] = None


class ItemResponse(ItemBase):
    id: int
    photo_url: Optional[str] = None

    @classmethod
    def from_item(cls, item: Item) -> "ItemResponse":
        return cls(
            id=item.id,
            name=item.name,
            description=item.description,
            photo_url=f"/inventory/{item.id}/photo" if item.photo else None,
        )


class Collection(BaseModel):
    """The persisted record: id counter plus items in creation order."""

    model_config = ConfigDict(populate_by_name=True)

    next_id: int = Field(default=0, alias="nextId")
    items: list[Item] = Field(default_factory=list)

    def find(self, item_id: int) -> Optional[Item]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def references(self, asset_name: str) -> bool:
        return any(item.photo == asset_name for item in self.items)


class DeleteResult(BaseModel):
    status: str = "deleted"
    id: int
