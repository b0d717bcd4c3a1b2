"""Report-layer exceptions"""


class ReportError(Exception):
    """Base exception for the reporting core"""

    pass


class InvalidArgument(ReportError, ValueError):
    """A caller passed a page, metric or month key the core cannot use"""

    pass


class DataSourceError(ReportError):
    """The billing database could not be queried"""

    pass
