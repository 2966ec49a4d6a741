"""
Exception classes for Chef Python SDK
"""

from typing import Optional, Dict, Any


class ChefSDKError(Exception):
    """Base exception for all Chef SDK errors"""
    
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}


class ValidationError(ChefSDKError):
    """Exception raised for validation failures"""
    pass


class TransportError(ChefSDKError):
    """Exception raised when the HTTP transport fails (connection, timeout, protocol)"""
    
    def __init__(self, message: str, error_code: str = "TRANSPORT_ERROR",
                 http_status: int = 0, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)
        self.http_status = http_status


class DecodeError(ChefSDKError):
    """Exception raised for non-JSON response bodies when strict decoding is enabled"""
    
    def __init__(self, message: str, error_code: str = "DECODE_ERROR",
                 http_status: int = 0, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)
        self.http_status = http_status
