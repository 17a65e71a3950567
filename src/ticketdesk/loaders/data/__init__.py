from .converters import cast_scalar

__all__ = ["cast_scalar"]
