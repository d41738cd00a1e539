"""Exceptions raised while loading secrets.

I/O failures on the input file are not wrapped; they propagate as the
built-in OSError.
"""


class SecretsLoaderError(Exception):
    """Base class for all secrets-loader errors."""
    pass


class UsageError(SecretsLoaderError):
    """Command line was used incorrectly (e.g. input file missing)."""
    pass


class FormatError(SecretsLoaderError):
    """CSV header or data row could not be decoded."""
    pass


class ValidationError(SecretsLoaderError):
    """A decoded record is missing a required field."""
    pass


class EmptyInputError(SecretsLoaderError):
    """The input file parsed but holds no secrets."""
    pass


class SecretServiceError(SecretsLoaderError):
    """The remote secret service rejected a request."""
    pass


class PublishError(SecretsLoaderError):
    """Creating a secret failed.

    Attributes:
        name: Name of the secret that could not be created
        cause: Underlying service error
    """

    def __init__(self, name: str, cause: Exception):
        self.name = name
        self.cause = cause
        super().__init__(f'create secret "{name}": {cause}')
