"""Build a single composed-tree snapshot of the live page."""

from __future__ import annotations

import itertools
import logging
from typing import Any, Protocol

from .models import SHADOW_ROOT_TAG, FlattenConfig, Rect, VirtualNode

logger = logging.getLogger(__name__)

# Runs in the page. Dumps <body> element by element: attributes, rect, requested
# styles, raw direct text, element children and the open shadow root if any.
# Ids, the shadow-root marker and depth pruning are applied in compose_tree().
FLATTEN_SCRIPT = """
({ styleProperties }) => {
  const ownText = (parent) => {
    let text = '';
    for (const child of parent.childNodes) {
      if (child.nodeType === Node.TEXT_NODE) text += child.textContent;
    }
    return text;
  };

  const rectOf = (el) => {
    const r = el.getBoundingClientRect();
    return { x: r.x, y: r.y, width: r.width, height: r.height };
  };

  const styleOf = (el) => {
    if (!styleProperties.length) return null;
    const computed = window.getComputedStyle(el);
    const out = {};
    for (const prop of styleProperties) out[prop] = computed.getPropertyValue(prop);
    return out;
  };

  const dump = (el) => {
    const attributes = {};
    for (const attr of el.attributes) attributes[attr.name] = attr.value;
    const root = el.shadowRoot;
    return {
      tag: el.tagName,
      attributes,
      rect: rectOf(el),
      style: styleOf(el),
      text: ownText(el),
      children: Array.from(el.children, dump),
      shadow: root
        ? { mode: root.mode, text: ownText(root), children: Array.from(root.children, dump) }
        : null,
    };
  };

  return document.body ? dump(document.body) : null;
}
"""


class ScriptTarget(Protocol):
    async def evaluate(self, expression: str, arg: Any = None) -> Any: ...


def _collapse(text: str | None) -> str | None:
    return " ".join((text or "").split()) or None


def compose_tree(raw: dict[str, Any], max_depth: int | None = None) -> VirtualNode:
    """Turn the page's element dump into a ``VirtualNode`` tree.

    Ids are assigned in pre-order. A shadow root becomes one ``#shadow-root``
    child appended after the host's light-DOM children and counts as a depth
    level. Nodes deeper than ``max_depth`` are dropped; the root is depth 0.
    """
    ids = itertools.count()

    def within(depth: int) -> bool:
        return max_depth is None or depth <= max_depth

    def element(data: dict[str, Any], depth: int, parent_id: str | None) -> VirtualNode:
        node = VirtualNode(
            node_id=f"vn-{next(ids)}",
            tag_name=str(data["tag"]).lower(),
            attributes={str(k): str(v) for k, v in (data.get("attributes") or {}).items()},
            parent_id=parent_id,
            rect=Rect.from_dict(data.get("rect")),
            computed_style=data.get("style"),
            text=_collapse(data.get("text")),
        )
        if within(depth + 1):
            node.children = [
                element(child, depth + 1, node.node_id) for child in data.get("children") or []
            ]
            if data.get("shadow") is not None:
                node.children.append(shadow_root(data["shadow"], node, depth + 1))
        return node

    def shadow_root(data: dict[str, Any], host: VirtualNode, depth: int) -> VirtualNode:
        marker = VirtualNode(
            node_id=f"vn-{next(ids)}",
            tag_name=SHADOW_ROOT_TAG,
            parent_id=host.node_id,
            is_shadow_root=True,
            shadow_mode=data.get("mode"),
            rect=host.rect,
            text=_collapse(data.get("text")),
        )
        if within(depth + 1):
            marker.children = [
                element(child, depth + 1, marker.node_id) for child in data.get("children") or []
            ]
        return marker

    return element(raw, 0, None)


class DOMFlattener:
    """Flatten light and shadow DOM into one ``VirtualNode`` tree.

    Works against anything exposing ``evaluate(expression, arg)``: a
    ``SessionDriver`` or a raw Playwright page. The page is never mutated.
    """

    def __init__(self, target: ScriptTarget):
        self._target = target

    async def build(self, config: FlattenConfig | None = None) -> VirtualNode:
        cfg = config or FlattenConfig()
        data = await self._target.evaluate(
            FLATTEN_SCRIPT, {"styleProperties": list(cfg.style_properties)}
        )
        if not data:
            logger.debug("Document has no body; returning fallback root")
            return VirtualNode.fallback()
        root = compose_tree(data, cfg.max_depth)
        logger.debug("Flattened %d nodes", sum(1 for _ in root.walk()))
        return root
