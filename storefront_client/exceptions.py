"""
Custom exceptions for the storefront client
"""

class StorefrontClientError(Exception):
    """Base exception for all client errors"""
    def __init__(self, message: str, status_code: int = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

class AuthenticationError(StorefrontClientError):
    """Raised when the admin API key is invalid or revoked"""
    pass

class NotFoundError(StorefrontClientError):
    """Raised when requested resource is not found"""
    pass

class ValidationError(StorefrontClientError):
    """Raised when input validation fails"""
    pass

class UploadError(StorefrontClientError):
    """Raised when the image CDN rejects an upload"""
    pass

class ConnectionError(StorefrontClientError):
    """Raised when connection to API fails"""
    pass
