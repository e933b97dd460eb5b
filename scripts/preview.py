import argparse

import cv2

from quadpic.color import rgb_to_bgr
from quadpic.config import MAX_DEPTH, MAX_DIFF
from quadpic.io import read_image
from quadpic.pipeline import FrameParams, apply_keys, is_quit_key, pressed_keys, render_frame


WINDOW = "quadpic"


def main():
    parser = argparse.ArgumentParser(description="Interactive quadtree preview window")
    parser.add_argument("input", help="Input image path")
    parser.add_argument("--max-diff", type=float, default=MAX_DIFF)
    parser.add_argument("--max-depth", type=int, default=MAX_DEPTH)
    parser.add_argument("--delay", type=int, default=10, help="Milliseconds between frames")
    args = parser.parse_args()

    pixels = read_image(args.input)
    params = FrameParams(max_diff=args.max_diff, max_depth=args.max_depth)
    print("Keys: q/e raise/lower diff, +/- depth, w hide outline, g greyscale, f fill, p grid, Esc/End quit")

    cv2.namedWindow(WINDOW, cv2.WINDOW_AUTOSIZE)
    pressed = set()
    try:
        while True:
            params = apply_keys(params, pressed)
            frame = render_frame(pixels, params)
            cv2.imshow(WINDOW, rgb_to_bgr(frame))
            cv2.setWindowTitle(WINDOW, f"{WINDOW} diff={params.max_diff:.1f} depth={params.max_depth}")

            key = cv2.waitKeyEx(args.delay)
            if is_quit_key(key) or cv2.getWindowProperty(WINDOW, cv2.WND_PROP_VISIBLE) < 1:
                break
            pressed = pressed_keys(key)
    finally:
        cv2.destroyAllWindows()


if __name__ == "__main__":
    main()
