"""Errors raised while reading bundled reference data."""


class ReferenceDataError(ValueError):
    """A fixture or boundary file exists but its contents cannot be used."""
