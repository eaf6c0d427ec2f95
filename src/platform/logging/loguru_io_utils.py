from inspect import FullArgSpec, getfile, getfullargspec, getsourcelines
from os.path import basename
import re
from time import time
from typing import Any, Callable, Optional

from src.platform.logging.loguru_io_config import (
    MASK,
    SENSITIVE_KEYWORDS,
    GeneratorMethod,
    call_depth_var,
    chain_start_time_var,
)


MAX_CONTENT_LENGTH = 1000

# key='value' / key="value" / key: value / "key": "value" pairs inside a repr
_SENSITIVE_PAIR_PATTERN = re.compile(
    r"""(['"]?)\b({keys})\b\1(\s*[=:]\s*)(['"]?)[^,'")}}\]\s]+\4""".format(
        keys='|'.join(sorted(SENSITIVE_KEYWORDS, key=len, reverse=True))
    ),
    re.IGNORECASE,
)


def handle_yield(yield_method: Optional[GeneratorMethod] = None) -> str:
    return f'yield: {yield_method} | ' if yield_method else ''


def get_chain_start_time() -> float:
    if not (start_time := chain_start_time_var.get()):
        start_time = time()
        chain_start_time_var.set(start_time)
    return start_time


def build_call_target_func_path(func: Callable[..., Any]) -> str:
    target = getattr(func, '__func__', func)
    try:
        lineno = getsourcelines(target)[1]
        filename = basename(getfile(target))
    except (OSError, TypeError):
        return func.__qualname__
    return f'{filename}::{func.__qualname__}:{lineno}'


def reset_call_depth() -> None:
    layer = max(call_depth_var.get() - 1, 0)
    call_depth_var.set(layer)
    if not layer:
        chain_start_time_var.set(0)


def normalize_args_kwargs(
    func: Callable[..., Any], *args: Any, **kwargs: Any
) -> tuple[tuple[Any, ...], dict[Any, Any]]:
    """Drop kwargs the target does not accept and trim surplus positionals"""
    if hasattr(func, '__wrapped__'):
        func = func.__wrapped__  # type: ignore
    full_arg_spec: FullArgSpec = getfullargspec(func)
    spec_args: list[str] = full_arg_spec.args

    if not full_arg_spec.varkw:
        kw_list: list[str] = spec_args + full_arg_spec.kwonlyargs
        kwargs = {k: v for k, v in kwargs.items() if k in kw_list}

    if not full_arg_spec.varargs:
        positional = [name for name in spec_args if name not in kwargs]
        args = args[: len(positional)]

    return args, kwargs


def _mask_pair(match: re.Match[str]) -> str:
    quote, key, separator = match.group(1), match.group(2), match.group(3)
    return f'{quote}{key}{quote}{separator}{MASK!r}'


def mask_sensitive(data: Any) -> Any:
    text = str(data)
    masked = _SENSITIVE_PAIR_PATTERN.sub(_mask_pair, text)
    return data if masked == text else masked


def should_mask_keyword(keyword: Any, value: Any) -> Any:
    return MASK if isinstance(keyword, str) and keyword.lower() in SENSITIVE_KEYWORDS else value


def truncate_content(content: Any, max_length: int = MAX_CONTENT_LENGTH) -> Any:
    if isinstance(content, bytes):
        return f'<{len(content)} bytes>'
    if isinstance(content, str) and len(content) > max_length:
        return f'{content[:max_length]}... ({len(content)} chars)'
    return content
