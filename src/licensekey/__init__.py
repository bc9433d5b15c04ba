from .errors import (
    LicenseKeyError,
    EmptyInputError,
    InvalidKeyError,
    EncodingError,
    LicenseFormatError,
    MalformedTokenError,
    DecodingError,
    SignatureFormatError,
    SigningError,
    SignatureVerificationError,
)
from .encoding import encode, decode, stringify
from .framing import (
    TokenFormat,
    DEFAULT_FORMAT,
    frame,
    unframe,
    format_signature,
    parse_signature,
)
from .crypto import digest, public_key_for, SignatureBackend, EcdsaBackend
from .token import generate, verify, decode_token, issue_token, verify_token

__version__ = "0.1.0"

__all__ = [
    "LicenseKeyError",
    "EmptyInputError",
    "InvalidKeyError",
    "EncodingError",
    "LicenseFormatError",
    "MalformedTokenError",
    "DecodingError",
    "SignatureFormatError",
    "SigningError",
    "SignatureVerificationError",
    "encode",
    "decode",
    "stringify",
    "TokenFormat",
    "DEFAULT_FORMAT",
    "frame",
    "unframe",
    "format_signature",
    "parse_signature",
    "digest",
    "public_key_for",
    "SignatureBackend",
    "EcdsaBackend",
    "generate",
    "verify",
    "decode_token",
    "issue_token",
    "verify_token",
]
