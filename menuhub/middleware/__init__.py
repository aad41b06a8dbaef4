"""HTTP middleware: request ID and security headers.

Applied in menuhub.main; first added is outermost.
"""

from menuhub.middleware.request_id import RequestIDMiddleware
from menuhub.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "RequestIDMiddleware",
    "SecurityHeadersMiddleware",
]
