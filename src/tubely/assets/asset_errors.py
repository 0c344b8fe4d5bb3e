"""Domain-specific exceptions for asset ingestion."""


class AssetError(Exception):
    """Base class for asset-related errors."""


class MissingPayloadError(AssetError):
    """Raised when the form has no file under the slot's field name."""


class MissingMediaTypeError(AssetError):
    """Raised when the upload declares no Content-Type."""


class UnsupportedMediaError(AssetError):
    """Raised when Content-Type is not allowed for the slot."""


class PayloadTooLargeError(AssetError):
    """Raised when uploaded file exceeds the slot ceiling."""


class VideoNotFoundError(AssetError):
    """Raised when the owning video record does not exist."""


class ForbiddenError(AssetError):
    """Raised when the caller does not own the video."""


class AssetNotFoundError(AssetError):
    """Raised when no stored bytes exist for a video."""


class StorageWriteError(AssetError):
    """Raised when a storage backend fails to persist the payload."""


class PersistenceError(AssetError):
    """Raised when the record store rejects the updated video.

    The asset has already been stored at this point and is not rolled back.
    """
