class InventoryError(Exception):
    """Base class for store failures; `status_code` is what the API answers with."""

    status_code = 500


class ValidationError(InventoryError):
    """A required field or upload is missing."""

    status_code = 400


class NotFoundError(InventoryError):
    status_code = 404


class AssetMissingError(InventoryError):
    """An item references a photo file that cannot be opened."""

    status_code = 500


class UploadError(InventoryError):
    status_code = 500


class StorageIOError(InventoryError):
    """The inventory record could not be read or written."""

    status_code = 500
