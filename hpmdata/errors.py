"""Exceptions raised while extracting chip data."""


class HpmDataError(Exception):
    """Base class for all extraction errors."""


class HeaderReadError(HpmDataError):
    """A located header file could not be read."""

    def __init__(self, path, cause):
        self.path = path
        super().__init__(f"Failed to read header {path}: {cause}")


class HeaderParseError(HpmDataError, ValueError):
    """A header was read but its contents are unusable."""

    def __init__(self, path, message):
        self.path = path
        super().__init__(f"{message} in {path}")


class ChipFileError(HpmDataError):
    """A chip description does not have the expected structure."""
