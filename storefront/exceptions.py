"""
Custom exceptions for the storefront backend
"""

class StorefrontError(Exception):
    """Base exception for all storefront errors"""
    status_code = 500

    def __init__(self, message: str, status_code: int = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

class ConfigurationError(StorefrontError):
    """Raised when a required secret or credential is not configured"""
    status_code = 500

class ValidationError(StorefrontError):
    """Raised when input is malformed or a required field is missing"""
    status_code = 422

class NotFoundError(StorefrontError):
    """Raised when a requested record does not exist"""
    status_code = 404

class StorageError(StorefrontError):
    """Raised when reading or writing the database fails"""
    status_code = 503

class UpstreamServiceError(StorefrontError):
    """Raised when the image CDN returns an error (message relayed as-is)"""
    status_code = 502
