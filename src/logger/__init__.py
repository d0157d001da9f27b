"""Logging utilities for the episode sync tool."""

from .logging_decorator import setup_logging, log_function

__all__ = ["setup_logging", "log_function"]
