"""Shared utilities for the backend."""
from utils.case import serialize_record
from utils.logging import get_logger

__all__ = ["serialize_record", "get_logger"]
