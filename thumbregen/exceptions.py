"""
Exceptions raised by the regeneration pipeline.
"""


class RegenError(Exception):
    """Base class for errors that abort processing of a single asset."""


class NotFoundError(RegenError):
    """The asset does not exist in the catalog."""


class UnsupportedTypeError(RegenError):
    """The asset's mime type is not eligible or cannot be decoded."""


class SourceMissingError(RegenError):
    """No original file could be resolved for the asset."""


class GenerationError(RegenError):
    """The thumbnail generator failed or returned nothing."""


class StorageError(RegenError):
    """A storage backend operation failed."""


class DeleteError(StorageError):
    """A derived file could not be removed."""


class InvalidConfigurationError(RegenError):
    """Configuration is incomplete or inconsistent."""
