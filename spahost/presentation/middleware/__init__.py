from .error_handler import error_response_middleware

__all__ = ["error_response_middleware"]
