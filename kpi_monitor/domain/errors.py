"""Domain errors."""


class DomainError(Exception):
    """Base domain error."""


class StoreReadError(DomainError):
    """Reading records from the backing store failed."""


class StoreWriteError(DomainError):
    """Writing records to the backing store failed."""


class SpreadsheetParseError(DomainError):
    """Uploaded spreadsheet could not be read."""


class UnknownLayoutError(DomainError):
    """No import layout is registered for the requested table."""


class UnknownMetricError(DomainError):
    """No metric definition is registered for the requested id."""


class ImportInProgressError(DomainError):
    """An import is already running on this importer."""
