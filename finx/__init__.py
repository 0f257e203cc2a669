"""Mini README: Core package initializer for the FinX personal ledger.

This module exposes convenience imports that allow other parts of the
application to access shared helpers without needing to know the exact
module structure. The ledger itself lives in ``finx.finance`` while the
dashboard and command line surfaces live in ``finx.interface``.
"""

from .logging_utils import get_logger

__version__ = "0.3.0"

__all__ = ["get_logger", "__version__"]
