"""Exceptions raised by the JSON document store."""


class StoreError(Exception):
    """Base class for every error the store raises."""


class InvalidArgument(StoreError, ValueError):
    """A collection or resource name is missing."""


class NotFound(StoreError, LookupError):
    """The requested record or collection does not exist."""


class IOFailure(StoreError, OSError):
    """The filesystem refused an operation (permissions, disk full, ...)."""


class EncodingFailure(StoreError, ValueError):
    """A value could not be serialized, or stored bytes could not be decoded."""
