from collections.abc import Mapping
from inspect import getfile, getsourcelines
from os.path import basename
import re
from typing import Any, Callable

from src.platform.logging.loguru_io_config import SENSITIVE_KEYWORDS


MASK = '********'
MAX_CONTENT_LENGTH = 500

# Matches `password='secret'` (attrs/pydantic reprs) and `'token': 'abc'` (dict reprs)
_SENSITIVE_PATTERN = re.compile(
    r'(\b(?:%s)\b[\'"]?)(\s*[=:]\s*[\'"])[^\'"]*([\'"])' % '|'.join(sorted(SENSITIVE_KEYWORDS))
)


def build_call_target_func_path(func: Callable[..., Any]) -> str:
    target = getattr(func, '__func__', func)
    try:
        lineno = getsourcelines(target)[1]
    except (OSError, TypeError):
        lineno = 0
    return f'{basename(getfile(target))}::{func.__qualname__}:{lineno}'


def mask_sensitive(data: Any) -> Any:
    """Mask secrets inside the repr of `data`; returns `data` itself when nothing matched."""
    data_str = str(data)
    new_data_str = _SENSITIVE_PATTERN.sub(rf'\1\2{MASK}\3', data_str)
    return data if data_str == new_data_str else new_data_str


def should_mask_keyword(keyword: Any, value: Any) -> Any:
    return MASK if keyword in SENSITIVE_KEYWORDS else value


def mask_mapping(data: Mapping[str, Any]) -> dict[str, Any]:
    return {key: mask_sensitive(should_mask_keyword(key, value)) for key, value in data.items()}


def truncate_content(data: Any) -> Any:
    data_str = str(data)
    if len(data_str) <= MAX_CONTENT_LENGTH:
        return data
    return f'{data_str[:MAX_CONTENT_LENGTH]}...(+{len(data_str) - MAX_CONTENT_LENGTH} chars)'
