"""Turn 3D media into scene nodes and drive their blend shapes."""

from __future__ import annotations

import logging
from typing import Mapping, Protocol

from svrf.core.errors import InvalidMediaForOperationError, SceneLoadError, SvrfError
from svrf.models.media import Media, MediaType
from svrf.models.scene import MORPH_NORMALIZED, Morpher, SceneNode
from svrf.services.analytics import (
    FACE_FILTER_NODE_REQUESTED_EVENT,
    NODE_REQUESTED_EVENT,
    AnalyticsTracker,
)

logger = logging.getLogger(__name__)

HEAD_NODE_NAME = "Head"
OCCLUDER_NODE_NAME = "Occluder"
FACE_FILTER_NODE_NAME = "FaceFilter"


class SceneLoader(Protocol):
    async def load(self, url: str) -> SceneNode:
        """Fetch and decode a binary glTF model, returning its root node."""
        ...


class SceneService:
    """Generate nodes from ``3d`` media through a pluggable scene loader."""

    def __init__(self, loader: SceneLoader, analytics: AnalyticsTracker | None = None) -> None:
        self._loader = loader
        self._analytics = analytics or AnalyticsTracker()

    async def generate_node(self, media: Media) -> SceneNode:
        """Return the root node of the whole 3D model.

        Not recommended for face filters; use :meth:`generate_face_filter_node`.
        """
        root = await self._load_scene(media)
        self._analytics.track(NODE_REQUESTED_EVENT, media_id=media.id or "unknown")
        return root

    async def generate_face_filter_node(self, media: Media, *, use_occluder: bool = True) -> SceneNode:
        """Build a face filter node holding the model's head and, optionally, its occluder."""
        scene_root = await self._load_scene(media)
        face_filter = SceneNode(name=FACE_FILTER_NODE_NAME, morpher=Morpher())

        if use_occluder:
            occluder = scene_root.child_node(OCCLUDER_NODE_NAME, recursive=True)
            if occluder is not None:
                face_filter.add_child(occluder)
                make_occluder(occluder)

        head = scene_root.child_node(HEAD_NODE_NAME, recursive=True)
        if head is not None:
            face_filter.add_child(head)
        else:
            logger.warning("Face filter %s has no %s node", media.id, HEAD_NODE_NAME)

        face_filter.morpher.calculation_mode = MORPH_NORMALIZED
        self._analytics.track(FACE_FILTER_NODE_REQUESTED_EVENT, media_id=media.id or "unknown")
        return face_filter

    async def _load_scene(self, media: Media) -> SceneNode:
        if media.type is not MediaType.THREE_D:
            raise InvalidMediaForOperationError()

        glb_url = media.glb_url
        if not glb_url:
            raise SceneLoadError(f"Media {media.id} has no glb file.")

        try:
            return await self._loader.load(glb_url)
        except SvrfError:
            raise
        except Exception as exc:  # pylint: disable=broad-except
            logger.warning("Loading scene for media %s failed: %s", media.id, exc)
            raise SceneLoadError(cause=exc) from exc


def make_occluder(node: SceneNode) -> None:
    """Hide every node under ``node`` while still writing depth, drawing it first."""
    for child in node.walk():
        if child.material is not None:
            child.material.color_write_enabled = False
        child.rendering_order = -1


def set_blend_shapes(blend_shapes: Mapping[str, float], face_filter: SceneNode) -> None:
    """Apply ARKit blend shape weights to every morph target named after them.

    Nodes that own morph targets propagate the weights to their own subtree;
    names without a matching target are ignored.
    """
    for node in face_filter.walk():
        if node.morpher is None or not node.morpher.targets:
            continue
        for child in node.walk():
            if child.morpher is None:
                continue
            for target_name, weight in blend_shapes.items():
                child.morpher.set_weight(target_name, float(weight))


__all__ = [
    "FACE_FILTER_NODE_NAME",
    "HEAD_NODE_NAME",
    "OCCLUDER_NODE_NAME",
    "SceneLoader",
    "SceneService",
    "make_occluder",
    "set_blend_shapes",
]
