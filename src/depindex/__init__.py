"""depindex: Pinned library-dependency registry and configuration resolver."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
