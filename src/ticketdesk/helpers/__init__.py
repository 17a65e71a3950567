from .bulk import bulk_load_context
from .null_handlers import normalise_null

__all__ = ["bulk_load_context", "normalise_null"]
