"""Observability helpers for linkset.

Submodules:
    logging -- structlog configuration and component-bound loggers.
"""

from linkset.observability.logging import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
