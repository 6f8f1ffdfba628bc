"""
Custom exception classes with error codes
"""


class VeoError(Exception):
    """Base exception for veo errors"""

    def __init__(self, message: str, code: str, details: str = ""):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON output"""
        return {"code": self.code, "message": self.message, "details": self.details}


class TransportError(VeoError):
    """Request could not be built or the network call failed"""

    def __init__(self, message: str, details: str = ""):
        super().__init__(message, "TRANSPORT_ERROR", details)


class APIError(VeoError):
    """Veo API answered with a non-2xx status"""

    def __init__(self, status_code: int, body: str = ""):
        super().__init__(
            f"API request failed with status {status_code}: {body}", "API_ERROR", body
        )
        self.status_code = status_code
        self.body = body

    def to_dict(self) -> dict[str, str]:
        result = super().to_dict()
        result["status_code"] = str(self.status_code)
        return result


class DecodeError(VeoError):
    """Response body is not the JSON we expected"""

    def __init__(self, message: str, details: str = ""):
        super().__init__(message, "DECODE_ERROR", details)


class ConfigError(VeoError):
    """Missing or invalid configuration"""

    def __init__(self, message: str, details: str = ""):
        super().__init__(message, "INVALID_CONFIG", details)


class RecordingNotFoundError(VeoError):
    """No recording available"""

    def __init__(self, message: str, details: str = ""):
        super().__init__(message, "RECORDING_NOT_FOUND", details)


class NotImplementedCommandError(VeoError):
    """Command exists but has no implementation yet"""

    def __init__(self, message: str, details: str = ""):
        super().__init__(message, "NOT_IMPLEMENTED", details)
