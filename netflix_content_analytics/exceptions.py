"""Exceptions raised while loading and querying the catalog."""


class CatalogError(Exception):
    """Base exception for catalog errors."""

    pass


class SchemaMismatchError(CatalogError):
    """Raised when loaded data does not match the catalog schema."""

    def __init__(self, message: str, column: str | None = None, show_ids: list[str] | None = None):
        super().__init__(message)
        self.column = column
        self.show_ids = show_ids or []


class DurationParseError(CatalogError, ValueError):
    """Raised when the leading integer of a duration cannot be extracted."""

    def __init__(self, value, show_id: str | None = None):
        super().__init__(f"Cannot parse duration {value!r}" + (f" (show_id={show_id})" if show_id else ""))
        self.value = value
        self.show_id = show_id


class DateParseError(CatalogError, ValueError):
    """Raised when date_added is not in 'Month DD, YYYY' format."""

    def __init__(self, value, show_id: str | None = None):
        super().__init__(f"Cannot parse date {value!r}" + (f" (show_id={show_id})" if show_id else ""))
        self.value = value
        self.show_id = show_id
