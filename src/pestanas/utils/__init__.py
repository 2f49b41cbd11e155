"""Utility helpers for Pestañas."""

from pestanas.utils.logger import get_logger

__all__ = ["get_logger"]
