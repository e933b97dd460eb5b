import cv2
import numpy as np

from .color import bgr_to_rgb, rgb_to_bgr


def read_image(path):
    frame = cv2.imread(path, cv2.IMREAD_COLOR)
    if frame is None:
        raise ValueError(f"Unable to read image: {path}")
    return bgr_to_rgb(frame)


def write_image(path, pixels):
    if not cv2.imwrite(path, rgb_to_bgr(pixels)):
        raise ValueError(f"Unable to write image: {path}")


def encode_png(pixels):
    ok, data = cv2.imencode(".png", rgb_to_bgr(pixels))
    if not ok:
        raise ValueError("PNG encoding failed")
    return data.tobytes()


def decode_image(data):
    buffer = np.frombuffer(data, dtype=np.uint8)
    frame = cv2.imdecode(buffer, cv2.IMREAD_COLOR)
    if frame is None:
        raise ValueError("Unable to decode image data")
    return bgr_to_rgb(frame)


def read_video_frames(path):
    cap = _open_capture(path)
    fps = cap.get(cv2.CAP_PROP_FPS) or 30.0
    try:
        frames = list(_iter_rgb_frames(cap))
    finally:
        cap.release()

    if not frames:
        raise ValueError(f"No frames read from: {path}")
    return frames, fps


def write_video_frames(path, frames, fps):
    if not frames:
        raise ValueError("No frames to write")

    size = frames[0].shape[:2]
    writer = _open_writer(path, fps, size)
    try:
        for frame in frames:
            if frame.shape[:2] != size:
                raise ValueError(f"Frame size {frame.shape[:2]} does not match {size}")
            writer.write(rgb_to_bgr(frame))
    finally:
        writer.release()


def _open_capture(path):
    cap = cv2.VideoCapture(path)
    if not cap.isOpened():
        raise ValueError(f"Unable to open video: {path}")
    return cap


def _iter_rgb_frames(cap):
    ok, frame = cap.read()
    while ok:
        yield bgr_to_rgb(frame)
        ok, frame = cap.read()


def _open_writer(path, fps, size):
    height, width = size
    writer = cv2.VideoWriter(path, cv2.VideoWriter_fourcc(*"mp4v"), fps, (width, height))
    if not writer.isOpened():
        raise ValueError(f"Unable to open video writer: {path}")
    return writer
