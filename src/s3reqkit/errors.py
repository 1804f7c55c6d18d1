"""Error definitions for s3reqkit.

Two tiers exist and must never be caught together:

* ``S3ClientError`` and its subclasses are recoverable, caller-reported
  failures (bad bucket name, out-of-range part size, ...).  The message names
  the violated rule and, where relevant, the offending value and the limit.
* ``FatalError`` and its subclasses signal a broken runtime or an internal
  contract violation.  The top-level caller is expected to abort instead of
  sending an unsigned or mis-signed request.
"""


class S3ClientError(Exception):
    """A recoverable, caller-reported error.

    Attributes:
        code: Short error code string (e.g. "InvalidBucketName").
        message: Human-readable error description.
        extra_fields: Additional key-value context about the failure.
    """

    def __init__(
        self,
        code: str,
        message: str,
        extra_fields: dict[str, str] | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            code: Error code.
            message: Error description.
            extra_fields: Optional extra context fields.
        """
        super().__init__(message)
        self.code = code
        self.message = message
        self.extra_fields = extra_fields or {}


# -- Recoverable errors -------------------------------------------------------


class InvalidArgument(S3ClientError):
    """An invalid argument was provided."""

    def __init__(self, message: str = "Invalid Argument") -> None:
        super().__init__(code="InvalidArgument", message=message)


class InvalidBucketName(S3ClientError):
    """The specified bucket name is not valid."""

    def __init__(self, bucket: str = "", reason: str = "The specified bucket is not valid.") -> None:
        super().__init__(
            code="InvalidBucketName",
            message=reason,
            extra_fields={"BucketName": bucket} if bucket else {},
        )


class InvalidPartSize(InvalidArgument):
    """The requested part size cannot be used for a multipart upload."""

    def __init__(self, message: str = "Invalid part size") -> None:
        super().__init__(message)
        self.code = "InvalidPartSize"


class EntityTooLarge(S3ClientError):
    """The proposed upload exceeds the maximum allowed object size."""

    def __init__(
        self, message: str = "Your proposed upload exceeds the maximum allowed object size."
    ) -> None:
        super().__init__(code="EntityTooLarge", message=message)


class TooManyParts(S3ClientError):
    """The object and part sizes would need more parts than allowed."""

    def __init__(self, message: str = "Too many parts for upload") -> None:
        super().__init__(code="TooManyParts", message=message)


# -- Fatal errors -------------------------------------------------------------


class FatalError(Exception):
    """An unrecoverable failure; callers must abort the operation."""


class CryptoFailure(FatalError):
    """A hashing primitive failed, which means the runtime is broken."""


class InvalidBoolString(FatalError):
    """An internal caller passed a string that is neither "true" nor "false"."""

    def __init__(self, value: str) -> None:
        super().__init__(f"unknown bool string {value!r}")
        self.value = value
