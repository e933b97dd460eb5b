from dataclasses import dataclass, replace

import numpy as np

from .blocks import build_tree, destroy_tree
from .config import DEPTH_LIMIT, DIFF_STEP, KEYS, MAX_DEPTH, MAX_DIFF, QUIT_KEYS
from .io import read_image, read_video_frames, write_image, write_video_frames
from .render import Canvas, RenderOptions, render, render_pixels
from .stats import tree_stats


@dataclass(frozen=True)
class FrameParams:
    max_diff: float = MAX_DIFF
    max_depth: int = MAX_DEPTH
    outline: bool = True
    greyscale: bool = False
    fill: bool = True
    grid: bool = False

    @property
    def render_options(self):
        return RenderOptions(outline=self.outline, greyscale=self.greyscale, fill=self.fill)


def apply_keys(params, pressed):
    # Outline is on unless its key is held this frame.
    pressed = set(pressed)
    max_diff = params.max_diff
    if KEYS["lower_diff"] in pressed:
        max_diff = max(0.0, max_diff - DIFF_STEP)
    if KEYS["raise_diff"] in pressed:
        max_diff += DIFF_STEP

    max_depth = params.max_depth
    if KEYS["deeper"] in pressed:
        max_depth = min(DEPTH_LIMIT, max_depth + 1)
    if KEYS["shallower"] in pressed:
        max_depth = max(0, max_depth - 1)

    return replace(
        params,
        max_diff=round(max_diff, 6),
        max_depth=max_depth,
        outline=KEYS["no_outline"] not in pressed,
        greyscale=params.greyscale ^ (KEYS["greyscale"] in pressed),
        fill=params.fill ^ (KEYS["fill"] in pressed),
        grid=params.grid ^ (KEYS["grid"] in pressed),
    )


def is_quit_key(code):
    return code in QUIT_KEYS


def pressed_keys(code):
    # Extended codes (arrows, End, ...) have no character binding.
    if 0 <= code < 256:
        return {chr(code)}
    return set()


def render_frame(pixels, params=FrameParams(), stats=None):
    tree = build_tree(pixels, params.max_diff, params.max_depth)
    if stats is not None:
        stats.update(tree_stats(tree))

    height, width = pixels.shape[:2]
    if params.grid:
        output = np.zeros((height, width, 3), dtype=np.uint8)
        render_pixels(tree, output, greyscale=params.greyscale)
    else:
        canvas = Canvas(width, height)
        render(tree, canvas, params.render_options)
        output = canvas.pixels

    destroy_tree(tree)
    return output


def run_image_pipeline(input_path, output_path, params=FrameParams()):
    pixels = read_image(input_path)
    stats = {}
    write_image(output_path, render_frame(pixels, params, stats))
    stats["width"] = pixels.shape[1]
    stats["height"] = pixels.shape[0]
    return stats


def run_video_pipeline(input_path, output_path, params=FrameParams()):
    frames, fps = read_video_frames(input_path)

    rendered = []
    leaves = 0
    for frame in frames:
        stats = {}
        rendered.append(render_frame(frame, params, stats))
        leaves += stats["leaves"]

    write_video_frames(output_path, rendered, fps)
    return {"frames": len(frames), "fps": fps, "leaves": leaves}
