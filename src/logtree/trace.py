"""
Function tracing decorator.

Logs calls at FINEST through the logger named after the function's module
in the default registry, so tracing is switched on the same way as any
other output: lower that logger's (or the root's) level to FINEST.
"""

import functools
from pathlib import Path

from .levels import FINEST


def _short_repr(value):
    """repr() that abbreviates long strings, long lists and paths."""
    if isinstance(value, Path):
        return f"Path('{value}')"
    if isinstance(value, str) and len(value) > 50:
        return f"'{value[:47]}...'"
    if isinstance(value, list) and len(value) > 3:
        return f"[...{len(value)} items...]"
    return repr(value)


def _format_args(func_name, args, kwargs, is_method):
    args_repr = []
    remaining = args
    if is_method and args and func_name != '__init__':
        args_repr.append('self')
        remaining = args[1:]
    args_repr.extend(_short_repr(arg) for arg in remaining)
    args_repr.extend(f"{key}={_short_repr(value)}" for key, value in kwargs.items())
    return ', '.join(args_repr)


def trace(func):
    """Decorator to trace function calls.

    Shows entry with arguments, exit with the return value (when not None),
    and any exception raised, all at FINEST. When FINEST is not loggable the
    call passes straight through.
    """
    module_name = func.__module__ or "unknown"
    func_name = func.__name__
    # A dotted qualname means the function was defined inside a class
    is_method = '.' in func.__qualname__ and '<locals>' not in func.__qualname__

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        # Lazy import to avoid circular dependency
        from .registry import get_logger

        log = get_logger(module_name)
        if not log.is_loggable(FINEST):
            return func(*args, **kwargs)

        log.finest(lambda: "[TRACE] >> {mod}.{fn}({args})".format(
            mod=module_name, fn=func_name,
            args=_format_args(func_name, args, kwargs, is_method)))

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            log.finest(f"[TRACE] !! {module_name}.{func_name} raised: "
                       f"{type(e).__name__}: {e}", error=e)
            raise

        if result is not None:
            log.finest(f"[TRACE] << {module_name}.{func_name} returned: "
                       f"{_short_repr(result)}")
        return result

    return wrapper
