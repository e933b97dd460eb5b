import math

import numpy as np


def magnitude(color):
    r, g, b = color
    return math.sqrt(r * r + g * g + b * b)


def magnitude_diff(a, b):
    return abs(magnitude(a) - magnitude(b))


def shade_of(color):
    r, g, b = color
    return (r + g + b) // 3


def greyscale_of(color):
    shade = shade_of(color)
    return (shade, shade, shade)


def bgr_to_rgb(frame_bgr):
    if frame_bgr.ndim == 2:
        return np.stack([frame_bgr, frame_bgr, frame_bgr], axis=2)
    return np.ascontiguousarray(frame_bgr[:, :, 2::-1])


def rgb_to_bgr(frame_rgb):
    return np.ascontiguousarray(frame_rgb[:, :, ::-1])
