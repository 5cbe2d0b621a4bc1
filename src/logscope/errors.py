"""Exception hierarchy for logscope.

Only ``StreamError`` ever crosses a thread boundary; the others are raised
and recovered inside the render pipeline.
"""
from __future__ import annotations


class LogscopeError(Exception):
    """Base class for all logscope errors."""


class StreamError(LogscopeError):
    """The input stream failed mid-read. Lines read so far stay usable."""


class FormatError(LogscopeError, ValueError):
    """Text handed to the JSON formatter is not valid JSON."""


class DecodeError(LogscopeError, ValueError):
    """A line could not be decoded into a JSON node."""
