"""
Error taxonomy shared by the stores, the query layer and the CLI.
Everything the CLI is expected to report derives from EmployeeTrackerError.
"""


class EmployeeTrackerError(Exception):
    pass


class ValidationError(EmployeeTrackerError):
    """Malformed input or a reference to a record that does not exist."""


class NotFoundError(EmployeeTrackerError):
    """The target of a get, update or delete does not exist."""


class BackendUnavailableError(EmployeeTrackerError):
    """The relational backend could not be reached or failed mid-statement."""


class StartupError(EmployeeTrackerError):
    pass
