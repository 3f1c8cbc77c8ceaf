# errors.py — error kinds surfaced by the admin API
# Every kind carries the HTTP status the handler boundary answers with.


class AdminError(Exception):
    status = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message or self.__class__.__name__


class ValidationError(AdminError):
    """Bad input: missing file, wrong type, oversized, malformed body."""
    status = 400


class NotFoundError(AdminError):
    status = 404


class StorageUploadError(AdminError):
    pass


class FolderResolutionError(AdminError):
    # Not fatal: the resolver catches it and the caller falls back to a default folder.
    pass


class MediaImportError(AdminError):
    pass


class RemoteApiError(AdminError):
    def __init__(self, message: str = "", status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(RemoteApiError):
    pass


class RemoteTimeoutError(AdminError):
    pass
