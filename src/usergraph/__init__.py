"""
usergraph
GraphQL demonstration server over a fixed in-memory user set
"""

__version__ = "0.1.0"

from .config import get_settings

__all__ = ["get_settings", "__version__"]
