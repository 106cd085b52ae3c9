"""Domain exceptions for image uploads."""


class UploadServiceError(Exception):
    """Base exception for upload errors."""
    pass


class InvalidFileTypeError(UploadServiceError):
    pass


class FileTooLargeError(UploadServiceError):
    pass


class UploadNotFoundError(UploadServiceError):
    pass
