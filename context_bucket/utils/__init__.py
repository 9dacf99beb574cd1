"""
Shared utilities for the context bucket library.
"""

from .logging import get_logger, initialize_logging_config

__all__ = ['get_logger', 'initialize_logging_config']
