import math
import os
import threading
import time
from dataclasses import asdict, replace

import numpy as np
from flask import Flask, Response, jsonify, render_template, request

from quadpic.config import DEPTH_LIMIT
from quadpic.io import encode_png, read_image
from quadpic.pipeline import FrameParams, apply_keys, render_frame


app = Flask(__name__, template_folder="templates")

BASE_DIR = os.getcwd()

CONFIG = {
    "input_image": os.getenv("QUADPIC_IMAGE", os.path.join(BASE_DIR, "img.jpg")),
    "fallback_width": 512,
    "fallback_height": 384,
}

STATE = {
    "params": FrameParams(),
    "pixels": None,
    "stats": {},
    "frame_ms": 0.0,
    "error": "",
}

LOCK = threading.Lock()


def _load_pixels():
    if STATE["pixels"] is None:
        if os.path.exists(CONFIG["input_image"]):
            STATE["pixels"] = read_image(CONFIG["input_image"])
        else:
            STATE["pixels"] = _generate_image(CONFIG["fallback_width"], CONFIG["fallback_height"])
    return STATE["pixels"]


def _generate_image(width, height):
    x = np.linspace(0, 255, width, dtype=np.float32)
    y = np.linspace(0, 255, height, dtype=np.float32)
    xv, yv = np.meshgrid(x, y)
    disc = ((xv - 128.0) ** 2 + (yv - 128.0) ** 2) < 80.0**2
    rgb = np.stack([xv, yv, np.where(disc, 230.0, 40.0)], axis=2)
    return rgb.astype(np.uint8)


def _parse_params(payload, params):
    updates = {}
    if "max_diff" in payload:
        if isinstance(payload["max_diff"], bool):
            raise ValueError("max_diff must be a number")
        max_diff = float(payload["max_diff"])
        if not (math.isfinite(max_diff) and max_diff >= 0):
            raise ValueError("max_diff must be a finite non-negative number")
        updates["max_diff"] = max_diff
    if "max_depth" in payload:
        if isinstance(payload["max_depth"], bool):
            raise ValueError("max_depth must be an integer")
        max_depth = int(payload["max_depth"])
        if not 0 <= max_depth <= DEPTH_LIMIT:
            raise ValueError(f"max_depth must be within [0, {DEPTH_LIMIT}]")
        updates["max_depth"] = max_depth
    for flag in ("outline", "greyscale", "fill", "grid"):
        if flag in payload:
            if not isinstance(payload[flag], bool):
                raise ValueError(f"{flag} must be a boolean")
            updates[flag] = payload[flag]
    return replace(params, **updates)


@app.route("/")
def landing():
    with LOCK:
        params = STATE["params"]
    return render_template("index.html", params=asdict(params))


@app.route("/frame.png")
def frame_png():
    with LOCK:
        params = STATE["params"]
        stats = {}
        started = time.time()
        try:
            output = render_frame(_load_pixels(), params, stats)
        except ValueError as exc:
            STATE["error"] = str(exc)
            return jsonify({"error": str(exc)}), 400
        STATE["stats"] = stats
        STATE["frame_ms"] = (time.time() - started) * 1000.0
        STATE["error"] = ""
    return Response(encode_png(output), mimetype="image/png")


@app.route("/api/params", methods=["GET"])
def api_get_params():
    with LOCK:
        return jsonify(asdict(STATE["params"]))


@app.route("/api/params", methods=["POST"])
def api_set_params():
    payload = request.get_json(silent=True) or {}
    with LOCK:
        try:
            STATE["params"] = _parse_params(payload, STATE["params"])
        except (TypeError, ValueError) as exc:
            STATE["error"] = str(exc)
            return jsonify({"error": str(exc)}), 400
        return jsonify(asdict(STATE["params"]))


@app.route("/api/keys", methods=["POST"])
def api_keys():
    payload = request.get_json(silent=True) or {}
    keys = payload.get("keys", [])
    if not isinstance(keys, list) or not all(isinstance(key, str) for key in keys):
        return jsonify({"error": "keys must be a list of strings"}), 400
    with LOCK:
        STATE["params"] = apply_keys(STATE["params"], keys)
        return jsonify(asdict(STATE["params"]))


@app.route("/api/stats")
def api_stats():
    with LOCK:
        return jsonify(
            {
                "stats": STATE["stats"],
                "frame_ms": round(STATE["frame_ms"], 2),
                "error": STATE["error"],
            }
        )


if __name__ == "__main__":
    port = int(os.getenv("PORT", "5000"))
    app.run(host="0.0.0.0", port=port)
