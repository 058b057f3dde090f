import logging
import sys
from typing import Optional

from .config import LOG_LEVEL

_configured = False


def setup_logging(level: Optional[str] = None, verbose: bool = False) -> None:
    """Configure root logging once; later calls are no-ops."""
    global _configured
    if _configured:
        return
    resolved = logging.DEBUG if verbose else getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO)
    logging.basicConfig(
        level=resolved,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    _configured = True
