# errors.py
# contract violations raised by the pipeline


class InvalidInputError(ValueError):
    """Grid or buffer does not satisfy the caller contract (shape, length, {0,255})."""
