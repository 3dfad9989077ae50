"""Clear exceptions for pys7repl: malformed addresses and S7 I/O errors."""


class PyS7ReplError(Exception):
    """Base exception for pys7repl."""

    pass


class MalformedAddressError(PyS7ReplError):
    """Raised when an address token matches none of the supported dialects."""

    def __init__(self, token: object, message: str | None = None) -> None:
        self.token = token
        self._msg = message or f"Malformed address: {token!r}"
        super().__init__(self._msg)


class PLCIOError(PyS7ReplError):
    """Raised when an S7 read fails (wraps python-snap7 or connection errors)."""

    def __init__(
        self,
        message: str,
        *,
        area: str | None = None,
        data_block: int | None = None,
        offset: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.area = area
        self.data_block = data_block
        self.offset = offset
        self.cause = cause
        super().__init__(message)
