"""
Error codes returned inside ``Result`` errors.

Codes are part of the public contract: the API layer maps them to HTTP
statuses and clients match on them.
"""


class ErrorCode:
    # Credentials and account gate
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    ACCOUNT_DEACTIVATED = "ACCOUNT_DEACTIVATED"
    ACCOUNT_LOCKED = "ACCOUNT_LOCKED"
    INVALID_STATE_TRANSITION = "INVALID_STATE_TRANSITION"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    EMAIL_ALREADY_EXISTS = "EMAIL_ALREADY_EXISTS"
    INVALID_PASSWORD = "INVALID_PASSWORD"

    # Tokens
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    SIGNING_KEY_MISSING = "SIGNING_KEY_MISSING"

    # Token codec
    MALFORMED_TOKEN = "MALFORMED_TOKEN"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"
    ISSUER_MISMATCH = "ISSUER_MISMATCH"
    AUDIENCE_MISMATCH = "AUDIENCE_MISMATCH"
    UNSUPPORTED_ALGORITHM = "UNSUPPORTED_ALGORITHM"

    # Email verification
    ALREADY_VERIFIED = "ALREADY_VERIFIED"

    # Signature renewal
    NO_RENEWAL_REQUESTED = "NO_RENEWAL_REQUESTED"
    INVALID_CODE = "INVALID_CODE"
    CODE_EXPIRED = "CODE_EXPIRED"
