"""Domain model exports."""

from .credential import Credential
from .media import Category, Media, MediaFiles, MediaPage, MediaType, StereoscopicType
from .scene import Material, Morpher, SceneNode

__all__ = [
    "Category",
    "Credential",
    "Material",
    "Media",
    "MediaFiles",
    "MediaPage",
    "MediaType",
    "Morpher",
    "SceneNode",
    "StereoscopicType",
]
