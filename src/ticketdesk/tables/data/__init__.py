from .converters import json_default

__all__ = ["json_default"]
