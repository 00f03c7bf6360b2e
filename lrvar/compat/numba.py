from collections.abc import Callable
import functools
import os
from typing import Any

from numba import jit as _jit

DISABLE_NUMBA = os.environ.get("LRVAR_DISABLE_NUMBA", "") in ("1", "true", "True")


def _no_jit(
    function_or_signature: Callable[..., Any] | None = None,
    *args: Any,
    **kwargs: Any,
) -> Any:
    if function_or_signature is not None and callable(function_or_signature):
        # Used directly, e.g., f_jit = jit(f)
        return function_or_signature

    # Used as a decorator, e.g., @jit(cache=True)
    def wrap(func: Callable[..., Any]) -> Callable[..., Any]:
        return func

    return wrap


if DISABLE_NUMBA:
    jit = _no_jit
else:
    jit = functools.partial(_jit, nopython=True)


__all__ = ["DISABLE_NUMBA", "jit"]
