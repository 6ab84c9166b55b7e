from __future__ import annotations

"""
Logging Bootstrap.

Idempotent configuration of the root logger for the command line entry
point. Records go through a QueueHandler; a QueueListener thread performs
the console and file I/O so that slow log storage never delays a
materialization. Library code only calls get_logger().
"""

import atexit
import logging
import os
import queue
import sys
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from gentree.infra.fs import get_user_data_dir
from gentree.infra.logging.config import _LEVEL_MAP, LoggingConfig
from gentree.infra.logging.handlers import (
    _create_rotating_file_handler,
    _create_stream_handler,
    _is_our_handler,
    _tag_handler,
)

_CONFIGURED_FLAG_ATTR: str = "_gentree_configured"
_QUEUE_LISTENER_ATTR: str = "_gentree_queue_listener"

# ==============================================================================
# PUBLIC API
# ==============================================================================

def get_default_log_path(file_name: str = "gentree.log") -> str:
    """Location of the persistent log inside the user data directory."""
    return os.path.join(get_user_data_dir(), "logs", file_name)


def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Attach the package handlers to the root logger.

    A second call is a no-op unless 'force' is set, in which case the
    previous handlers and listener are torn down first.

    Args:
        cfg: Logging settings.
        force: Re-initialize even if already configured.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()

    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    try:
        level_int = _parse_level(cfg.level)
        root.setLevel(level_int)

        _remove_our_handlers(root)
        _stop_existing_listener(root)

        handlers_list: List[logging.Handler] = []
        if cfg.console:
            handlers_list.append(
                _create_stream_handler(level_int, logging.Formatter(cfg.console_fmt))
            )
        if cfg.log_file:
            fh = _create_rotating_file_handler(
                cfg.log_file,
                level_int,
                logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt),
                cfg.max_bytes,
                cfg.backup_count,
            )
            if fh:
                handlers_list.append(fh)

        if not handlers_list:
            return root

        log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
        queue_handler = QueueHandler(log_queue)
        _tag_handler(queue_handler)

        listener = QueueListener(log_queue, *handlers_list, respect_handler_level=True)
        listener.start()
        root.addHandler(queue_handler)

        setattr(root, _QUEUE_LISTENER_ATTR, listener)
        setattr(root, _CONFIGURED_FLAG_ATTR, True)
        atexit.register(_safe_stop_listener, listener)
        return root

    # Emergency console logging if the queue infrastructure cannot start
    except Exception:
        _remove_our_handlers(root)
        sh = logging.StreamHandler(sys.stderr)
        sh.setFormatter(logging.Formatter("gentree FALLBACK | %(levelname)s | %(message)s"))
        _tag_handler(sh)
        root.addHandler(sh)
        root.warning("Logging infrastructure failed. Switched to plain console output.")
        return root


def shutdown_logging() -> None:
    """Flush and stop the listener; the next configure_logging() starts fresh."""
    root = logging.getLogger()
    _stop_existing_listener(root)
    _remove_our_handlers(root)
    if hasattr(root, _CONFIGURED_FLAG_ATTR):
        delattr(root, _CONFIGURED_FLAG_ATTR)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)

# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    if not level:
        return logging.WARNING
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.WARNING)


def _remove_our_handlers(root: logging.Logger) -> None:
    for h in list(root.handlers):
        if _is_our_handler(h):
            root.removeHandler(h)
            h.close()


def _stop_existing_listener(root: logging.Logger) -> None:
    listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if listener:
        _safe_stop_listener(listener)
        for h in listener.handlers:
            h.close()
        setattr(root, _QUEUE_LISTENER_ATTR, None)


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    """Stop a listener, tolerating one that was already stopped."""
    if listener is not None and getattr(listener, "_thread", None) is not None:
        listener.stop()
