"""HTTP middleware: timeout, request ID, correlation ID.

Applied in main app; order matters (first added = outermost).
Import and use from app.main.
"""

from app.middleware.request_ids import CorrelationIDMiddleware, RequestIDMiddleware
from app.middleware.timeout import TimeoutMiddleware

__all__ = [
    "CorrelationIDMiddleware",
    "RequestIDMiddleware",
    "TimeoutMiddleware",
]
