"""
Errors raised by third-party provider wrappers.
"""


class ProviderError(Exception):
    """A provider call failed: transport error, non-success status or SDK error."""


class ProviderInvalidResponseError(ProviderError):
    """The provider answered, but without the field we needed."""
