from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, PositiveFloat, PositiveInt

AssetStatus = Literal["draft", "available", "pending", "sold"]
ASSET_STATUSES: tuple[str, ...] = ("draft", "available", "pending", "sold")


class Asset(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str | None = None
    category_id: str = Field(min_length=1)

    title: str = Field(min_length=3)
    slug: str = Field(min_length=2)
    description: str = Field(min_length=10)
    short_description: str | None = None

    price: PositiveFloat
    share_price_guide: PositiveFloat | None = None
    total_shares: PositiveInt | None = None

    feature_image: str | None = None
    images: list[str] = Field(default_factory=list)
    video_url: str | None = None

    address: str | None = None
    state: str | None = None
    country: str = "Australia"
    latitude: float | None = None
    longitude: float | None = None
    location: str | None = None
    area: str | None = None

    dynamic_data: dict[str, Any] = Field(default_factory=dict)

    status: AssetStatus = "draft"
    published: bool = False
    featured: bool = False

    agent_name: str | None = None
    phone_number: str | None = None
    company_name: str | None = None

    meta_title: str | None = None
    meta_description: str | None = None
    tags: list[str] = Field(default_factory=list)

    created_at: str | None = None
    updated_at: str | None = None
