"""Transformer module for converting course schedules to various output formats."""

from .base import BaseTransformer, TransformResult
from .errors import InvalidDay, InvalidPeriod, ScheduleError
from .ical_transformer import ICalTransformer, build_document, escape_text, unescape_text

__all__ = [
    "BaseTransformer",
    "ICalTransformer",
    "InvalidDay",
    "InvalidPeriod",
    "ScheduleError",
    "TransformResult",
    "build_document",
    "escape_text",
    "unescape_text",
]
