from dataclasses import dataclass

import cv2
import numpy as np

from .config import (
    BACKGROUND_COLOR,
    OUTLINE_COLOR,
    OVERLAY_COLOR,
    SEPARATOR_COLOR,
    UNFILLED_COLOR,
)


@dataclass(frozen=True)
class RenderOptions:
    outline: bool = True
    greyscale: bool = False
    fill: bool = True


class Canvas:
    def __init__(self, width, height, background=BACKGROUND_COLOR):
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas must have positive size, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels = np.empty((height, width, 3), dtype=np.uint8)
        self.pixels[:, :] = background

    def fill_rect(self, quad, color):
        self.pixels[quad.y0 : quad.y1, quad.x0 : quad.x1] = color

    def stroke_rect(self, quad, color):
        cv2.rectangle(
            self.pixels,
            (quad.x0, quad.y0),
            (quad.x1 - 1, quad.y1 - 1),
            tuple(int(c) for c in color),
            1,
        )

    def put_pixel(self, x, y, color):
        self.pixels[y, x] = color

    def to_array(self):
        return self.pixels.copy()


def render(node, surface, options=RenderOptions()):
    for child in node.children:
        render(child, surface, options)
    if not node.is_leaf:
        return

    quad = node.quad
    color = quad.greyscale if options.greyscale else quad.color
    surface.fill_rect(quad, color if options.fill else UNFILLED_COLOR)
    if options.outline:
        surface.stroke_rect(quad, OUTLINE_COLOR)


def render_pixels(node, buffer, greyscale=False, separator=SEPARATOR_COLOR):
    root = node.quad
    if buffer.shape[:2] != (root.y1, root.x1):
        raise ValueError(
            f"Buffer {buffer.shape[1]}x{buffer.shape[0]} does not match tree "
            f"{root.x1}x{root.y1}"
        )
    _paint_leaves(node, buffer, greyscale, separator)
    return buffer


def draw_block_overlay(frame, leaves, color=OVERLAY_COLOR, thickness=1):
    overlay = frame.copy()
    for block in leaves:
        quad = block.quad
        cv2.rectangle(overlay, (quad.x0, quad.y0), (quad.x1 - 1, quad.y1 - 1), color, thickness)
    return overlay


def _paint_leaves(node, buffer, greyscale, separator):
    for child in node.children:
        _paint_leaves(child, buffer, greyscale, separator)
    if not node.is_leaf:
        return

    quad = node.quad
    buffer[quad.y0 : quad.y1, quad.x0 : quad.x1] = quad.greyscale if greyscale else quad.color
    buffer[quad.y0 : quad.y1, quad.x1 - 1] = separator
    buffer[quad.y1 - 1, quad.x0 : quad.x1] = separator
