"""Exceptions raised by the siting pipeline."""


class SitingError(Exception):
    """Base class for all siting errors."""


class DataAccessError(SitingError, OSError):
    """An input file or layer could not be read. Fatal to the run."""


class SitingConfigError(SitingError, ValueError):
    """Inputs or parameters are inconsistent (bins, CRS, units)."""


class CRSMismatchError(SitingConfigError):
    """Two layers meant to be combined are in different CRSs."""
