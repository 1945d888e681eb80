# squarelab/__init__.py

# I/O
from .io_save_load import load_rgb, save_rgb, save_json
from .errors import InvalidInputError

# Binarisation & topology
from .binarise import to_gray, binarise, border_counts
from .topology import fill_holes, extract_components, validate_binary

# Features
from .features import (
    FeatureVector,
    compute_features,
    fill_ratio,
)

# Decisions
from .decide import (
    is_square,
    straight_square,
    rotated_square,
    is_compact,
    Thresholds,  # tune here if needed
)
from .classify import Verdict, classify_component, anchor_point

# Pipeline
from .pipeline import (
    Detection,
    DetectionReport,
    grid_from_buffer,
    detect_squares,
    process_glob,
)
