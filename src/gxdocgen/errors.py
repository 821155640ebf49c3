"""Exceptions raised while reading export packages."""


class XpzError(Exception):
    """Raised when an export package cannot be read."""


class ExportParseError(XpzError):
    """Raised when an export XML document cannot be decoded."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to parse {source}: {reason}")
