from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Blog(BaseModel):
    """Blog post row; column names follow the backend's camelCase where it uses them."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str | None = None
    slug: str = Field(min_length=3)
    category: str = Field(min_length=1)
    category_id: str = Field(min_length=1, alias="categoryId")
    title: str = Field(min_length=5, max_length=200)
    excerpt: str = Field(min_length=10, max_length=500)
    image: str | None = None
    date: str | None = None
    read_time: str | None = Field(default=None, alias="readTime")
    content: str = Field(min_length=50)
    related_posts: list[int] = Field(default_factory=list, alias="relatedPosts")
    published: bool = False
    created_at: str | None = None
    updated_at: str | None = None
