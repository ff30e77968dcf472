"""
Shared utilities package.

This package contains logging configuration, the Result helper and
UTC date helpers used across the application.
"""

from mymovies.utils.logging_config import setup_logging, configure_script_logging
from mymovies.utils.result import Ok, Err, Result

__all__ = ['setup_logging', 'configure_script_logging', 'Ok', 'Err', 'Result']
