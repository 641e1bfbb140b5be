"""
Exception types shared across the application
"""


class AccessToolError(Exception):
    """Base class for all application errors"""
    pass


class InvalidKey(AccessToolError):
    """Master key is not exactly 32 bytes"""

    def __init__(self, message: str = "invalid master key: must be 32 bytes for AES-256"):
        super().__init__(message)


class DecryptionFailed(AccessToolError):
    """Envelope is malformed, tampered with, or was sealed with another key"""

    def __init__(self, message: str = "decryption failed: invalid data or wrong key"):
        super().__init__(message)


class ConfigParseError(AccessToolError):
    """Stored settings file exists but is not a valid settings document"""
    pass


class NotFound(AccessToolError):
    """Update or delete target does not exist"""
    pass


class ValidationError(AccessToolError):
    """Request input has the wrong shape"""
    pass


class StoreUnavailable(AccessToolError):
    """No live database connection"""

    def __init__(self, message: str = "Database not connected"):
        super().__init__(message)


class StoreError(AccessToolError):
    """Underlying query or statement failed"""
    pass
