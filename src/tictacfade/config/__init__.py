"""
Tic-Tac-Fade Configuration.

Environment variables, settings, and logging configuration.
"""

from tictacfade.config.settings import Settings, configure_logging, get_settings

__all__ = ["Settings", "configure_logging", "get_settings"]
