"""
Media values returned by the SVRF API.

Instances are read-only: the SDK hands them to callers exactly as parsed.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class MediaType(str, Enum):
    PHOTO = "photo"
    VIDEO = "video"
    THREE_D = "3d"


class StereoscopicType(str, Enum):
    NONE = "none"
    TOP_BOTTOM = "top-bottom"
    LEFT_RIGHT = "left-right"


class Category(str, Enum):
    FACE_FILTERS = "Face Filters"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class MediaFiles(_FrozenModel):
    """Downloadable renditions of a media item."""

    glb: Optional[str] = Field(None, description="Binary glTF model, present for 3D media.")
    usdz: Optional[str] = None
    gltf: Optional[dict[str, str]] = None
    images: Optional[dict[str, str]] = None
    videos: Optional[dict[str, str]] = None
    stereo: Optional[dict[str, str]] = None


class Media(_FrozenModel):
    id: str
    type: MediaType
    title: Optional[str] = None
    description: Optional[str] = None
    authors: Optional[list[str]] = None
    canonical: Optional[str] = None
    url: Optional[str] = None
    site: Optional[str] = None
    files: Optional[MediaFiles] = None
    metadata: Optional[dict[str, Any]] = None

    @property
    def glb_url(self) -> str | None:
        return self.files.glb if self.files else None


class MediaPage(_FrozenModel):
    """One page of media plus whichever pagination pointer the endpoint returned."""

    items: list[Media] = Field(default_factory=list)
    next_page_num: Optional[int] = None
    next_page_cursor: Optional[str] = None


__all__ = [
    "Category",
    "Media",
    "MediaFiles",
    "MediaPage",
    "MediaType",
    "StereoscopicType",
]
