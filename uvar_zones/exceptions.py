"""Errors surfaced to callers of the emission zone pipeline"""


class ZoneDataError(Exception):
    """Base class for all emission zone data errors"""


class DocumentParseError(ZoneDataError):
    """The source document is not well-formed XML"""


class FetchError(ZoneDataError):
    """The source document could not be retrieved"""

    def __init__(self, message: str, url: str = ""):
        super().__init__(message)
        self.url = url
