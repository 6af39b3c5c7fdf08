from enum import IntEnum


class CheckStatus(IntEnum):
    SUCCESS = 200
    FAILURE = 500
