# io_save_load.py
# load/save helpers

from PIL import Image
import numpy as np, pathlib as _p

def load_rgb(path: str) -> np.ndarray:
    """Decode PNG/JPG/BMP into an (H,W,3) uint8 grid."""
    with Image.open(path) as im:
        return np.array(im.convert('RGB'), dtype=np.uint8)

def save_rgb(path: str, grid: np.ndarray):
    _p.Path(path).parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(np.asarray(grid, dtype=np.uint8)).save(path)

def save_json(path: str, obj: dict):
    import json, os
    _p.Path(os.path.dirname(path) or ".").mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f: json.dump(obj, f, ensure_ascii=False, indent=2)
