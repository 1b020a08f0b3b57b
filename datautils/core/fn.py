from __future__ import annotations

import functools
from typing import Any, Callable, Optional, Sequence

from datautils.core import arrays


def force_arg_length(fn: Callable[..., Any], forced_args_length: Optional[int]) -> Callable[..., Any]:
    """
    Wrap fn so it is always called with exactly forced_args_length positional
    arguments: missing ones are filled with None, extra ones are dropped.
    A forced_args_length of None leaves the arguments alone.
    """

    @functools.wraps(fn)
    def wrapper(*args: Any) -> Any:
        call_args = list(args)
        if isinstance(forced_args_length, int):
            if forced_args_length > len(call_args):
                call_args += [None] * (forced_args_length - len(call_args))
            else:
                call_args = call_args[:forced_args_length]
        return fn(*call_args)

    return wrapper


def partial(
    fn: Callable[..., Any],
    left_args: Sequence[Any] = (),
    right_args: Sequence[Any] = (),
    forced_args_length: Optional[int] = None,
) -> Callable[..., Any]:
    """Bind left_args before and right_args after the call arguments."""
    left = list(left_args or [])
    right = list(right_args or [])

    def bound(*args: Any) -> Any:
        return fn(*left, *args, *right)

    return force_arg_length(bound, forced_args_length)


def merge_arguments(*arg_sets: Any) -> list:
    """Merge positional argument sets index-wise; later sets win."""
    as_lists = [a if isinstance(a, list) else list(a) for a in arg_sets]
    return arrays.merge(*as_lists)
