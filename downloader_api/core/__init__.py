from .errors import ExtractionError, NoStreamError, RelayError, api_error

__all__ = ["ExtractionError", "NoStreamError", "RelayError", "api_error"]
