"""Application layer DTOs"""

from src.service.seatchecker.app.dto.check_request import CheckRequest
from src.service.seatchecker.app.dto.check_result import CheckResult

__all__ = [
    'CheckRequest',
    'CheckResult',
]
