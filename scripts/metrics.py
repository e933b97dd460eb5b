import argparse

from quadpic.blocks import build_tree, destroy_tree
from quadpic.config import MAX_DEPTH
from quadpic.io import read_image
from quadpic.render import Canvas, RenderOptions, render
from quadpic.stats import psnr, tree_stats


def main():
    parser = argparse.ArgumentParser(description="Leaf count and PSNR across split thresholds")
    parser.add_argument("input", help="Input image path")
    parser.add_argument("--diff-list", default="0,1,2,5,10,20,40")
    parser.add_argument("--max-depth", type=int, default=MAX_DEPTH)
    parser.add_argument("--output-csv", default="threshold_curve.csv")
    args = parser.parse_args()

    pixels = read_image(args.input)
    diffs = [float(d.strip()) for d in args.diff_list.split(",") if d.strip()]

    rows = []
    for max_diff in diffs:
        row = _metrics_for_threshold(pixels, max_diff, args.max_depth)
        row["max_diff"] = max_diff
        rows.append(row)

    _write_csv(args.output_csv, rows)
    _print_table(rows, args.output_csv)


def _metrics_for_threshold(pixels, max_diff, max_depth):
    tree = build_tree(pixels, max_diff, max_depth)
    height, width = pixels.shape[:2]
    canvas = Canvas(width, height)
    render(tree, canvas, RenderOptions(outline=False))

    row = tree_stats(tree)
    destroy_tree(tree)
    row["psnr"] = psnr(pixels, canvas.pixels)
    row["ratio"] = row["leaves"] / float(width * height)
    return row


def _write_csv(path, rows):
    if not rows:
        return
    with open(path, "w", encoding="utf-8") as handle:
        handle.write("max_diff,nodes,leaves,depth,psnr,ratio\n")
        for row in rows:
            handle.write(
                f"{row['max_diff']},{row['nodes']},{row['leaves']},"
                f"{row['depth']},{row['psnr']:.2f},{row['ratio']:.4f}\n"
            )


def _print_table(rows, csv_path):
    print("Diff   Leaves   Depth  PSNR(dB)  Ratio")
    for row in rows:
        print(
            f"{row['max_diff']:<6.1f} {row['leaves']:<8} {row['depth']:<6} "
            f"{row['psnr']:<9.2f} {row['ratio']:.4f}"
        )
    print(f"Saved CSV: {csv_path}")


if __name__ == "__main__":
    main()
