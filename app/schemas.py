import json
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, model_validator


class StoreProfile(BaseModel):
    """Restaurant attributes used to build the strategy prompt."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    store_name: str = Field(default="本日のお店", alias="storeName")
    category: str = Field(default="飲食店")
    target: str = Field(default="想定しているお客様")
    goal: str = Field(default="来店数の増加")
    concept: str = Field(default="お店の世界観")
    menu_text: str = Field(default="", alias="menuText")
    free_note: str = Field(default="", alias="freeNote")

    @model_validator(mode="before")
    @classmethod
    def _apply_defaults(cls, data: Any) -> Any:
        if data is None:
            return data
        if not isinstance(data, dict):
            # Arrays and scalars carry no fields, so every default applies.
            data = {}
        resolved: Dict[str, str] = {}
        for name, field in cls.model_fields.items():
            key = field.alias or name
            value = data.get(key)
            if not value:
                # Empty strings, 0, false and null all fall back to the default.
                continue
            resolved[key] = value if isinstance(value, str) else json.dumps(value, ensure_ascii=False)
        return resolved


class BrandStrategy(BaseModel):
    """Shape the model is asked to produce; returned to callers as-is."""

    overview: str
    targetInsight: str
    strength: str
    coreMessage: str
    objective: str
    contentStrategy: str
    visualGuide: str
