class DriverError(RuntimeError):
    pass


class DatabaseConnectionError(DriverError):
    pass


class NotConnectedError(DriverError):
    pass


class QueryError(DriverError):
    pass


class StatementError(DriverError, ValueError):
    """Raised before any SQL reaches the server."""


class InvalidIdentifierError(StatementError):
    pass


class UnboundedWriteError(StatementError):
    """UPDATE/DELETE without conditions and without allow_all=True."""
