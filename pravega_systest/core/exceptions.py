class AppException(Exception):
    """Base system test framework exception."""

    pass


class ConfigurationError(AppException):
    """A service handle cannot be fully parameterized."""

    pass


class ServiceError(AppException):
    """A deployment backend failed to carry out a lifecycle operation."""

    pass
