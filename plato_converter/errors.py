"""Typed errors raised by the strict conversion entry points.

WHY: Top-level input problems (wrong type, empty document, no assistant
name) must fail immediately with an error that names the violated
precondition. Per-item problems inside a transcript are logged and
skipped instead, so they never reach this module.

RULES:
- ConversionError subclasses ValueError, so callers that already catch
  ValueError for bad input keep working
- InvalidInput: the input value itself is unusable
- MissingConfiguration: a required setting (assistant name) is absent
"""


class ConversionError(ValueError):
    """Base class for all conversion failures."""


class InvalidInput(ConversionError):
    """The input has the wrong type or is empty where content is required."""


class MissingConfiguration(ConversionError):
    """A setting required by the conversion was not provided."""
