"""Composed-tree snapshot models."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

SHADOW_ROOT_TAG = "#shadow-root"
FALLBACK_NODE_ID = "root-fallback"


@dataclass(frozen=True, slots=True)
class Rect:
    """Post-layout bounding box in CSS pixels."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Rect:
        data = data or {}
        return cls(
            x=float(data.get("x", 0)),
            y=float(data.get("y", 0)),
            width=float(data.get("width", 0)),
            height=float(data.get("height", 0)),
        )


@dataclass
class VirtualNode:
    """One element (or shadow-root marker) in the flattened tree."""

    node_id: str
    tag_name: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[VirtualNode] = field(default_factory=list)
    parent_id: str | None = None
    is_shadow_root: bool = False
    shadow_mode: str | None = None
    rect: Rect = field(default_factory=Rect)
    computed_style: dict[str, str] | None = None
    text: str | None = None

    @classmethod
    def fallback(cls) -> VirtualNode:
        """Empty body-tagged root used when the document has no body."""
        return cls(node_id=FALLBACK_NODE_ID, tag_name="body")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VirtualNode:
        return cls(
            node_id=str(data["node_id"]),
            tag_name=str(data["tag_name"]),
            attributes={str(k): str(v) for k, v in (data.get("attributes") or {}).items()},
            children=[cls.from_dict(child) for child in data.get("children") or []],
            parent_id=data.get("parent_id"),
            is_shadow_root=bool(data.get("is_shadow_root", False)),
            shadow_mode=data.get("shadow_mode"),
            rect=Rect.from_dict(data.get("rect")),
            computed_style=data.get("computed_style"),
            text=data.get("text"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "node_id": self.node_id,
            "tag_name": self.tag_name,
            "attributes": dict(self.attributes),
            "children": [child.to_dict() for child in self.children],
            "parent_id": self.parent_id,
            "is_shadow_root": self.is_shadow_root,
            "shadow_mode": self.shadow_mode,
            "rect": {
                "x": self.rect.x,
                "y": self.rect.y,
                "width": self.rect.width,
                "height": self.rect.height,
            },
            "computed_style": self.computed_style,
            "text": self.text,
        }

    def walk(self) -> Iterator[VirtualNode]:
        """Yield this node and every descendant in pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def shape(self) -> tuple:
        """Structural fingerprint that ignores layout geometry."""
        return (
            self.node_id,
            self.tag_name,
            tuple(sorted(self.attributes.items())),
            self.parent_id,
            self.is_shadow_root,
            self.shadow_mode,
            tuple(sorted((self.computed_style or {}).items())),
            self.text,
            tuple(child.shape() for child in self.children),
        )

    def depth(self) -> int:
        """Height of the subtree rooted here; a leaf has depth 0."""
        if not self.children:
            return 0
        return 1 + max(child.depth() for child in self.children)


@dataclass(frozen=True, slots=True)
class FlattenConfig:
    """What to capture per node and how deep to descend."""

    style_properties: tuple[str, ...] = ()
    max_depth: int | None = None

    def __post_init__(self) -> None:
        if self.max_depth is not None and self.max_depth < 0:
            raise ValueError("max_depth must be >= 0")
