from typing import Any, Dict, Optional
from contextlib import contextmanager
import logging
import threading

import numpy as np

from . import logger


_DEFAULTS: Dict[str, Any] = {
    'default_dtype': np.float64,
    'print_threshold': 10,
    'log_level': 'WARNING',
}


def _check_dtype(value):
    return np.dtype(value).type

def _check_threshold(value):
    value = int(value)
    if value < 0:
        raise ValueError(f"print_threshold must be non-negative, but got {value}")
    return value

def _check_level(value):
    if isinstance(value, int):
        return value
    level = logging.getLevelName(str(value).upper())
    if not isinstance(level, int):
        raise ValueError(f"unknown log level '{value}'")
    return str(value).upper()

_VALIDATORS = {
    'default_dtype': _check_dtype,
    'print_threshold': _check_threshold,
    'log_level': _check_level,
}


class OptionManager():
    """Package-wide options with thread-local overrides.

    Options are read as attributes (`options.default_dtype`) or through
    `get_option`. Values set in one thread are not seen by the others, which
    fall back to the defaults given at construction.

    Parameters:
        defaults (dict | None, optional): option names and default values.
        logger (Logger | None, optional): logger whose level follows the
            `log_level` option. Managers without one never touch logging levels.
    """
    def __init__(self, *, defaults: Optional[Dict[str, Any]]=None,
                 logger: Optional[logging.Logger]=None):
        self._defaults: Dict[str, Any] = dict(_DEFAULTS if defaults is None else defaults)
        self._THREAD_LOCAL = threading.local()
        self._logger = logger

    def _apply_log_level(self) -> None:
        if self._logger is not None and 'log_level' in self._defaults:
            self._logger.setLevel(self.get_option('log_level'))

    def _local(self) -> Dict[str, Any]:
        return self._THREAD_LOCAL.__dict__

    def set_option(self, name: str, value: Any) -> None:
        """Set an option for the current thread."""
        if name not in self._defaults:
            raise KeyError(f"Option '{name}' is not found.")
        if name in _VALIDATORS:
            value = _VALIDATORS[name](value)
        self._local()[name] = value
        if name == 'log_level':
            self._apply_log_level()
        logger.debug(f"Option '{name}' set to {value!r}.")

    def get_option(self, name: str) -> Any:
        """Get the value of an option in the current thread."""
        local = self._local()
        if name in local:
            return local[name]
        if name in self._defaults:
            return self._defaults[name]
        raise KeyError(f"Option '{name}' is not found.")

    def reset(self) -> None:
        """Drop every override made in the current thread."""
        self._local().clear()
        self._apply_log_level()

    def __getattr__(self, item):
        """Redirect attribute access to the option table."""
        if item.startswith('_'):
            raise AttributeError(item)
        try:
            return self.get_option(item)
        except KeyError as e:
            raise AttributeError(item) from e

    def __setattr__(self, key, value):
        """Redirect attribute assignment to the option table."""
        if key in {'_defaults', '_THREAD_LOCAL', '_logger'}:
            super().__setattr__(key, value)
        else:
            self.set_option(key, value)


options = OptionManager(logger=logger)


@contextmanager
def option_context(**kwargs):
    """Temporarily set options inside a `with` block.

    Example:

        >>> with option_context(default_dtype='float32'):
        ...     m = MapMatrix()
    """
    local = options._local()
    saved = {k: local[k] for k in kwargs if k in local}
    try:
        for k, v in kwargs.items():
            options.set_option(k, v)
        yield options
    finally:
        for k in kwargs:
            if k in saved:
                local[k] = saved[k]
            else:
                local.pop(k, None)
        options._apply_log_level()
