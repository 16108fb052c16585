"""
Exceptions for zkdrop
Everything raised by the package derives from ZKDropError so callers have a
single error catcher.
"""


class ZKDropError(Exception):
    # general container for errors
    code = "ERROR"


class FormatError(ZKDropError):
    # raised on malformed base64 or a blob too short to hold its nonce
    code = "INVALID_FORMAT"


class InputError(ZKDropError):
    # raised before any crypto work when inputs are missing or mis-sized
    code = "INVALID_INPUT"


class FileTooLargeError(InputError):
    # raised when a file exceeds MAX_FILE_SIZE
    code = "FILE_TOO_LARGE"


class AuthenticationError(ZKDropError):
    # raised when an AEAD tag does not verify
    code = "AUTHENTICATION_FAILED"


class WrongPasswordError(AuthenticationError):
    # raised when the wrapped file key does not open under the password key
    code = "WRONG_PASSWORD"


class CorruptedDataError(AuthenticationError):
    # raised when the file body does not open under an unwrapped file key
    code = "CORRUPTED_DATA"


class AccessDeniedError(ZKDropError):
    # raised when the share gate refuses a request
    code = "ACCESS_DENIED"


class ShareNotFoundError(AccessDeniedError):
    code = "FILE_NOT_FOUND"


class ShareExpiredError(AccessDeniedError):
    # expired or deactivated share
    code = "FILE_EXPIRED"


class DownloadLimitReachedError(AccessDeniedError):
    code = "DOWNLOAD_LIMIT_REACHED"


class PasswordRequiredError(AccessDeniedError):
    code = "PASSWORD_REQUIRED"


class InvalidPasswordError(AccessDeniedError):
    # verifier mismatch at the gate; not a cryptographic failure
    code = "INVALID_PASSWORD"
