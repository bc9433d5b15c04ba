from __future__ import annotations


class LicenseKeyError(RuntimeError):
    """Base class for every error raised by licensekey."""

    pass


class EmptyInputError(LicenseKeyError):
    """Exception raised when license data, a token or a key argument is missing."""

    pass


class InvalidKeyError(LicenseKeyError):
    """Exception raised when a key is not a non-empty byte buffer."""

    pass


class EncodingError(LicenseKeyError):
    """Exception raised when license data cannot be encoded unambiguously."""

    pass


class LicenseFormatError(LicenseKeyError):
    """Exception raised when license token format is invalid."""

    pass


class MalformedTokenError(LicenseFormatError):
    """Exception raised when the header, footer or block layout of a token is wrong."""

    pass


class DecodingError(LicenseFormatError):
    """Exception raised when the key-value block of a token cannot be parsed."""

    pass


class SignatureFormatError(LicenseFormatError):
    """Exception raised when the signature block is not canonical uppercase hex."""

    pass


class SigningError(LicenseKeyError):
    """Exception raised when the signing backend fails."""

    pass


class SignatureVerificationError(LicenseKeyError):
    """Exception raised when license signature verification fails."""

    pass
