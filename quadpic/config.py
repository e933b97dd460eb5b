MAX_DIFF = 5.0
MAX_DEPTH = 7

DIFF_STEP = 0.1
DEPTH_LIMIT = 16

OUTLINE_COLOR = (0, 0, 0)
UNFILLED_COLOR = (255, 255, 255)
SEPARATOR_COLOR = (0, 0, 0)
BACKGROUND_COLOR = (0, 0, 0)
OVERLAY_COLOR = (255, 200, 0)

# Held-key bindings for the interactive frame loop.
KEYS = {
    "lower_diff": "e",
    "raise_diff": "q",
    "no_outline": "w",
    "greyscale": "g",
    "fill": "f",
    "grid": "p",
    "deeper": "+",
    "shallower": "-",
}

# Esc, plus End as reported by waitKeyEx on GTK and Windows.
QUIT_KEYS = (27, 0xFF57, 0x230000)
