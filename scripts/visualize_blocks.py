import argparse

from quadpic.blocks import build_tree, destroy_tree, leaf_blocks
from quadpic.config import MAX_DEPTH, MAX_DIFF
from quadpic.io import read_video_frames, write_video_frames
from quadpic.pipeline import FrameParams, run_video_pipeline
from quadpic.render import draw_block_overlay


def main():
    parser = argparse.ArgumentParser(description="Visualize quadtree blocks on every video frame")
    parser.add_argument("input", help="Input video path")
    parser.add_argument("output", help="Output video path")
    parser.add_argument("--max-diff", type=float, default=MAX_DIFF)
    parser.add_argument("--max-depth", type=int, default=MAX_DEPTH)
    parser.add_argument("--overlay", action="store_true", help="Outline blocks over the source frames")
    parser.add_argument("--thickness", type=int, default=1)
    parser.add_argument("--greyscale", action="store_true")
    parser.add_argument("--grid", action="store_true")
    args = parser.parse_args()

    if not args.overlay:
        params = FrameParams(
            max_diff=args.max_diff,
            max_depth=args.max_depth,
            greyscale=args.greyscale,
            grid=args.grid,
        )
        summary = run_video_pipeline(args.input, args.output, params)
        print(f"Frames: {summary['frames']}  Leaves: {summary['leaves']}")
        return

    frames, fps = read_video_frames(args.input)
    visualized = []
    for frame in frames:
        tree = build_tree(frame, args.max_diff, args.max_depth)
        visualized.append(draw_block_overlay(frame, leaf_blocks(tree), thickness=args.thickness))
        destroy_tree(tree)

    write_video_frames(args.output, visualized, fps)
    print(f"Frames: {len(visualized)}")


if __name__ == "__main__":
    main()
