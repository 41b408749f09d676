# tracer/config.py
from __future__ import annotations
import json, os
from typing import Optional

# Window
WINDOW_WIDTH  = 1000
WINDOW_HEIGHT = 640
FPS           = 60

# View
DEFAULT_PX_PER_METER = 120.0
MIN_PX_PER_METER     = 10.0
MAX_PX_PER_METER     = 400.0
ZOOM_STEP            = 1.1
ORIGIN_MARGIN_X      = 80
ORIGIN_MARGIN_Y      = 60
MAJOR_EVERY_M        = 5

# Colors (RGB), cyan blended over the background
BG_COLOR          = (7, 11, 16)
GRID_COLOR        = (6, 28, 35)
MAJOR_GRID_COLOR  = (6, 49, 59)
AXIS_COLOR        = (5, 81, 100)
PATH_COLOR        = (0, 212, 255)
PREVIEW_COLOR     = AXIS_COLOR
POINT_COLOR       = (255, 255, 255)
FIRST_POINT_COLOR = (0, 255, 170)
HOVER_COLOR       = (255, 107, 53)
TEXT_COLOR        = (200, 230, 240)
DIM_TEXT_COLOR    = (0, 120, 145)

CONFIG_FILENAME = "config.json"

DEFAULT_CONFIG = {
    "view": {
        "px_per_meter":     {"value": DEFAULT_PX_PER_METER},
        "min_px_per_meter": {"value": MIN_PX_PER_METER},
        "max_px_per_meter": {"value": MAX_PX_PER_METER},
        "zoom_step":        {"value": ZOOM_STEP},
        "origin_margin_x":  {"value": ORIGIN_MARGIN_X},
        "origin_margin_y":  {"value": ORIGIN_MARGIN_Y},
    },
    "editor": {
        "snap_to_grid":     {"value": 0},
        "close_path":       {"value": 0},
        "copied_ms":        {"value": 1500},
        "delete_radius_px": {"value": 10},
    },
    "window": {
        "width":  {"value": WINDOW_WIDTH},
        "height": {"value": WINDOW_HEIGHT},
        "fps":    {"value": FPS},
    },
}

def _flatten(section: dict) -> dict:
    """Extract 'value' from nested dict structure."""
    flat = {}
    for k, v in section.items():
        flat[k] = v.get("value", v) if isinstance(v, dict) and "value" in v else v
    return flat

def _section_flat(cfg: dict, name: str) -> dict:
    """Flatten a section, filling keys it lacks from the defaults."""
    flat = _flatten(DEFAULT_CONFIG[name])
    flat.update(_flatten((cfg or {}).get(name, {})))
    return flat

def _load_json(path: str) -> Optional[dict]:
    """Load JSON file, return None on failure."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError):
        return None

def _save_json(path: str, data: dict) -> None:
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)

def default_config_path() -> str:
    here = os.path.dirname(__file__)
    return os.path.normpath(os.path.join(here, os.pardir, CONFIG_FILENAME))

def load_config(path: Optional[str] = None) -> dict:
    """Load config from disk, create default if missing."""
    path = path or default_config_path()
    data = _load_json(path)
    if not isinstance(data, dict):
        data = json.loads(json.dumps(DEFAULT_CONFIG))
        try:
            _save_json(path, data)
        except OSError as e:
            print(f"Could not write default config to {path}: {e}")
    return data

def save_config(cfg_dict: dict, path: Optional[str] = None) -> bool:
    """Save flattened config sections back in wrapped form."""
    path = path or default_config_path()
    def wrap(v): return {"value": v}
    try:
        raw = {
            "view":   {k: wrap(float(v)) for k, v in view_flat(cfg_dict).items()},
            "editor": {k: wrap(int(v)) for k, v in editor_flat(cfg_dict).items()},
            "window": {k: wrap(int(v)) for k, v in window_flat(cfg_dict).items()},
        }
        _save_json(path, raw)
    except (OSError, TypeError, ValueError) as e:
        print(f"Failed to save config: {e}")
        return False
    print(f"Config saved to {path}")
    return True

def view_flat(cfg: dict) -> dict:
    """Flatten view section."""
    return _section_flat(cfg, "view")

def editor_flat(cfg: dict) -> dict:
    """Flatten editor section."""
    return _section_flat(cfg, "editor")

def window_flat(cfg: dict) -> dict:
    """Flatten window section."""
    return _section_flat(cfg, "window")
