__all__ = ["__version__", "transform"]
__version__ = "0.1.0"

# handy re-export for convenience
from .tags.engine import transform  # noqa: E402
