from __future__ import annotations


class StoreError(Exception):
    """
    Base class for every failure the store reports to its callers.

    `message` is human-readable and safe to hand back to a client as is.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StoreError):
    """A required argument is missing, empty or malformed."""


class FileNotFound(StoreError):
    pass


class FileAlreadyExists(StoreError):
    pass


class InvalidKey(StoreError):
    """The key is absent, or its value is one of the invalid (falsy) values."""


class ParseError(StoreError):
    """Stored content is not a JSON object."""


class IOFailure(StoreError):
    pass
