"""Request canonicalization and validation primitives for S3-compatible clients."""

from s3reqkit.errors import (
    CryptoFailure,
    EntityTooLarge,
    FatalError,
    InvalidArgument,
    InvalidBoolString,
    InvalidBucketName,
    InvalidPartSize,
    S3ClientError,
    TooManyParts,
)
from s3reqkit.multimap import HeaderMultimap
from s3reqkit.partplan import PartPlan, calc_part_info, iter_parts
from s3reqkit.timestamp import Timestamp
from s3reqkit.validation import BucketNameCheck, check_bucket_name, validate_bucket_name

__version__ = "0.1.0"

__all__ = [
    "BucketNameCheck",
    "calc_part_info",
    "check_bucket_name",
    "CryptoFailure",
    "EntityTooLarge",
    "FatalError",
    "HeaderMultimap",
    "InvalidArgument",
    "InvalidBoolString",
    "InvalidBucketName",
    "InvalidPartSize",
    "iter_parts",
    "PartPlan",
    "S3ClientError",
    "Timestamp",
    "TooManyParts",
    "validate_bucket_name",
]
