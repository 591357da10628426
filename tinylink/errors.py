"""Error kinds raised by the TinyLink core."""


class TinyLinkError(Exception):
    """Base class for all TinyLink errors."""


class InvalidURLError(TinyLinkError, ValueError):
    """Destination URL failed normalization or syntax validation."""


class InvalidFormatError(TinyLinkError, ValueError):
    """Custom short code does not match the 6-8 character alphanumeric rule."""


class LinkConflictError(TinyLinkError):
    """The requested short code already exists."""

    def __init__(self, short_code: str):
        super().__init__(f"Short code '{short_code}' already exists")
        self.short_code = short_code


class LinkNotFoundError(TinyLinkError):
    """No link exists for the given short code."""

    def __init__(self, short_code: str):
        super().__init__(f"Short code '{short_code}' not found")
        self.short_code = short_code


class StorageError(TinyLinkError):
    """The storage backend is unreachable or rejected a well-formed operation."""


class CodeSpaceExhaustedError(StorageError):
    """Auto-generation gave up after the maximum number of attempts."""

    def __init__(self, attempts: int):
        super().__init__(f"Unable to generate unique short code after {attempts} attempts")
        self.attempts = attempts
