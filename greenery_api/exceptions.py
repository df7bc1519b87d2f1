# COMPONENT: ERROR TAXONOMY
# REQUIREMENTS SATISFIED: not-found vs. internal vs. misconfiguration failures
"""
greenery_api/exceptions.py

Exception types raised by the configuration, storage and service layers.
Routers translate them into HTTP responses:

    RecordNotFound            -> 404
    StorageError              -> 500
    StorageConfigurationError -> 500 (service misconfigured)

ConfigurationError is raised while reading the environment and is never
caught by request handlers directly; get_storage() wraps it.
"""


class GreeneryError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(GreeneryError):
    """An environment variable holds a missing or invalid value."""


class StorageError(GreeneryError):
    """The object store failed, or returned something unusable."""


class StorageConfigurationError(StorageError):
    """The storage handle could not be built (credentials, region, client)."""


class RecordNotFound(GreeneryError):
    def __init__(self, key: str):
        super().__init__(f"not found: {key}")
        self.key = key
