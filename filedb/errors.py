from enum import IntEnum


class Status(IntEnum):
    """
    Result codes returned by FileDB operations.

    Numeric values are stable; scripts may compare against them directly.
    """

    OK = 0
    GENERAL_ERROR = 1
    RECORD_NOT_FOUND = 2
    RECORD_EXISTS = 3
    ENCODE_ERROR = 4
    DECODE_ERROR = 5
    INVALID_RECORD_NAME = 6


class InvalidDatabaseName(ValueError):
    """Raised by FileDB when the database name is not a valid identifier."""

    def __init__(self, name):
        super().__init__(f"Invalid database name: {name!r}")
        self.name = name
