from __future__ import annotations


class LightsError(Exception):
    """Base class for errors raised by the engine."""

    pass


class DimensionMismatchError(LightsError, ValueError):
    """Operand shapes are incompatible (product, augment, solve)."""

    pass


class MatrixIndexError(LightsError, IndexError):
    """Row or column index outside the matrix extents."""

    pass


class FieldElementError(LightsError, ValueError):
    """Value is not an element of the field it was handed to."""

    pass


class NotInvertibleError(LightsError):
    pass
