import math
from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

from .color import greyscale_of, magnitude_diff, shade_of


class InvalidRegionError(ValueError):
    pass


class DegenerateImageError(ValueError):
    pass


@dataclass(frozen=True)
class Quad:
    x0: int
    y0: int
    x1: int
    y1: int
    color: Tuple[int, int, int]
    shade: int
    greyscale: Tuple[int, int, int]

    @property
    def width(self) -> int:
        return self.x1 - self.x0

    @property
    def height(self) -> int:
        return self.y1 - self.y0

    @property
    def rect(self) -> Tuple[int, int, int, int]:
        return self.x0, self.y0, self.x1, self.y1


@dataclass
class Node:
    quad: Quad
    depth: int
    children: List["Node"] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return not self.children


def aggregate(pixels, x0, y0, x1, y1):
    height, width = pixels.shape[:2]
    if not (0 <= x0 < x1 <= width and 0 <= y0 < y1 <= height):
        raise InvalidRegionError(
            f"Empty or out-of-bounds region ({x0}, {y0})-({x1}, {y1}) "
            f"for {width}x{height} image"
        )

    region = pixels[y0:y1, x0:x1, :3]
    count = (x1 - x0) * (y1 - y0)
    sums = region.reshape(-1, 3).sum(axis=0, dtype=np.int64)
    color = tuple(int(total) // count for total in sums)
    return Quad(x0, y0, x1, y1, color, shade_of(color), greyscale_of(color))


def split_rect(x0, y0, x1, y1):
    mx = (x0 + x1) // 2
    my = (y0 + y1) // 2
    return [
        (x0, y0, mx, my),
        (mx, y0, x1, my),
        (x0, my, mx, y1),
        (mx, my, x1, y1),
    ]


def should_split(parent, candidates, max_diff):
    return any(
        magnitude_diff(child.color, parent.color) > max_diff for child in candidates
    )


def build_tree(pixels, max_diff, max_depth):
    _check_image(pixels)
    if max_depth < 0:
        raise ValueError("Max depth must be non-negative")
    if not (math.isfinite(max_diff) and max_diff >= 0):
        raise ValueError(f"Max diff must be finite and non-negative, got {max_diff}")

    height, width = pixels.shape[:2]
    root = aggregate(pixels, 0, 0, width, height)
    return _build_node(pixels, root, 0, float(max_diff), int(max_depth))


def iter_nodes(node):
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def leaf_blocks(node):
    return [current for current in iter_nodes(node) if current.is_leaf]


def destroy_tree(node):
    for child in node.children:
        destroy_tree(child)
    node.children = []


def _build_node(pixels, quad, depth, max_diff, max_depth):
    node = Node(quad, depth)
    if depth >= max_depth or quad.width < 2 or quad.height < 2:
        return node

    candidates = [aggregate(pixels, *rect) for rect in split_rect(*quad.rect)]
    if should_split(quad, candidates, max_diff):
        node.children = [
            _build_node(pixels, child, depth + 1, max_diff, max_depth)
            for child in candidates
        ]
    return node


def _check_image(pixels):
    if pixels.ndim != 3 or pixels.shape[2] < 3:
        raise DegenerateImageError(
            f"Expected an (height, width, 3) RGB image, got shape {pixels.shape}"
        )
    height, width = pixels.shape[:2]
    if width == 0 or height == 0:
        raise DegenerateImageError(f"Image has no pixels ({width}x{height})")
