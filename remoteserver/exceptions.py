"""
Exception types.
"""


class RemoteServerError(Exception):
    """Base class for errors raised inside the probes."""


class TargetError(RemoteServerError, ValueError):
    """A probe target string could not be parsed."""
