"""Screen/model coordinate mapping for the graph view.

Pan and zoom only ever change the viewport; node coordinates are changed solely by
dragging, through :func:`drag_node`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from treeweaver.models import TextNode
from treeweaver.tree import find_node, set_position

MIN_SCALE = 0.1
MAX_SCALE = 3.0
ZOOM_STEP = 0.1
WHEEL_SENSITIVITY = 0.001


def clamp_scale(scale: float, min_scale: float = MIN_SCALE, max_scale: float = MAX_SCALE) -> float:
    return min(max(min_scale, scale), max_scale)


def screen_delta_to_model(dx: float, dy: float, scale: float) -> tuple[float, float]:
    """Convert a pointer delta in screen pixels to a model-space delta."""

    if scale <= 0:
        raise ValueError(f"scale must be positive, got {scale}")
    return dx / scale, dy / scale


@dataclass(frozen=True)
class Viewport:
    """Pan offset and zoom scale of the graph view.

    Screen position = model position * scale + pan.
    """

    scale: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0
    min_scale: float = MIN_SCALE
    max_scale: float = MAX_SCALE

    @property
    def zoom_percent(self) -> int:
        return round(self.scale * 100)

    def pan_by(self, dx: float, dy: float) -> Viewport:
        return replace(self, pan_x=self.pan_x + dx, pan_y=self.pan_y + dy)

    def zoom_by(self, delta: float) -> Viewport:
        return replace(self, scale=clamp_scale(self.scale + delta, self.min_scale, self.max_scale))

    def zoom_in(self, step: float = ZOOM_STEP) -> Viewport:
        return self.zoom_by(step)

    def zoom_out(self, step: float = ZOOM_STEP) -> Viewport:
        return self.zoom_by(-step)

    def zoom_wheel(self, delta_y: float, sensitivity: float = WHEEL_SENSITIVITY) -> Viewport:
        """Apply a wheel event; scrolling up (negative ``delta_y``) zooms in."""

        return self.zoom_by(-delta_y * sensitivity)

    def screen_to_model(self, sx: float, sy: float) -> tuple[float, float]:
        return (sx - self.pan_x) / self.scale, (sy - self.pan_y) / self.scale

    def model_to_screen(self, mx: float, my: float) -> tuple[float, float]:
        return mx * self.scale + self.pan_x, my * self.scale + self.pan_y


def drag_node(root: TextNode, node_id: str, dx: float, dy: float, scale: float) -> TextNode:
    """Move a placed node by a screen-space pointer delta.

    Returns ``root`` unchanged when the node is unknown or has not been laid out yet.
    """

    node = find_node(root, node_id)
    if node is None or node.x is None or node.y is None:
        return root
    mdx, mdy = screen_delta_to_model(dx, dy, scale)
    return set_position(root, node_id, node.x + mdx, node.y + mdy)
