from enum import StrEnum


class RowCountStrategy(StrEnum):
    ROW_LIST_LENGTH = 'row_list_length'
    MAX_ROW_NUMBER = 'max_row_number'
