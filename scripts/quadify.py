import argparse
import os

from quadpic.config import MAX_DEPTH, MAX_DIFF
from quadpic.pipeline import FrameParams, run_image_pipeline


def main():
    parser = argparse.ArgumentParser(description="Render an image as a quadtree of flat blocks")
    parser.add_argument("input", help="Input image path")
    parser.add_argument("output", help="Output image path")
    parser.add_argument("--max-diff", type=float, default=MAX_DIFF)
    parser.add_argument("--max-depth", type=int, default=MAX_DEPTH)
    parser.add_argument("--no-outline", action="store_true")
    parser.add_argument("--greyscale", action="store_true")
    parser.add_argument("--no-fill", action="store_true")
    parser.add_argument("--grid", action="store_true", help="Pixel-buffer mode with grid separators")
    args = parser.parse_args()

    params = FrameParams(
        max_diff=args.max_diff,
        max_depth=args.max_depth,
        outline=not args.no_outline,
        greyscale=args.greyscale,
        fill=not args.no_fill,
        grid=args.grid,
    )
    stats = run_image_pipeline(args.input, args.output, params)

    print(f"Image: {stats['width']}x{stats['height']}")
    print(f"Nodes: {stats['nodes']}  Leaves: {stats['leaves']}  Depth: {stats['depth']}")
    print(f"Output size: {os.path.getsize(args.output)} bytes")


if __name__ == "__main__":
    main()
