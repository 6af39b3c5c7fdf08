from src.service.seatchecker.domain.enum.check_status import CheckStatus
from src.service.seatchecker.domain.enum.row_count_strategy import RowCountStrategy


__all__ = ['CheckStatus', 'RowCountStrategy']
