import numpy as np

from .blocks import iter_nodes


def tree_stats(node):
    nodes = 0
    leaves = 0
    depth = 0
    for current in iter_nodes(node):
        nodes += 1
        if current.is_leaf:
            leaves += 1
        depth = max(depth, current.depth)
    return {"nodes": nodes, "leaves": leaves, "depth": depth}


def psnr(original, rendered):
    if original.shape != rendered.shape:
        raise ValueError("Shape mismatch between original and rendered image")
    diff = original.astype(np.float64) - rendered.astype(np.float64)
    mse = float(np.mean(diff * diff))
    if mse == 0:
        return float("inf")
    return 10.0 * np.log10((255.0 * 255.0) / mse)
