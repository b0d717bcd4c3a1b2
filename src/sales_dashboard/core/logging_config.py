import logging
import sys

from .config import LOG_LEVEL


class NamespaceFilter(logging.Filter):
    def __init__(self, allowed_namespaces=None):
        super().__init__()
        self.allowed_namespaces = allowed_namespaces if allowed_namespaces is not None else []

    def filter(self, record):
        if not self.allowed_namespaces:
            return True # If no namespaces are specified, allow all records
        # Allow record if its name starts with any of the allowed namespaces
        return any(record.name.startswith(ns) for ns in self.allowed_namespaces)

log_formatter = logging.Formatter(
    fmt="%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def configure_logging(level: str = LOG_LEVEL, allowed_namespaces=None) -> logging.Logger:
    """
    Attach a stdout handler to the 'sales_dashboard' logger.

    Modules log through logging.getLogger(__name__), so every logger below
    'sales_dashboard' inherits this handler and level unless it sets its own.
    Calling this more than once does not stack handlers.
    """
    app_logger = logging.getLogger("sales_dashboard")
    app_logger.setLevel(level)

    for handler in list(app_logger.handlers):
        if getattr(handler, "_sales_dashboard_console", False):
            app_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    console_handler._sales_dashboard_console = True
    if allowed_namespaces:
        console_handler.addFilter(NamespaceFilter(allowed_namespaces))
    app_logger.addHandler(console_handler)

    # The monthly aggregation queries are the heaviest ones; keep them visible
    # at DEBUG when the service is being profiled:
    # logging.getLogger("sales_dashboard.features.reports.service").setLevel(logging.DEBUG)

    return app_logger

