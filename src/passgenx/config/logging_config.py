import logging
import os
import sys
import traceback
import pendulum

from passgenx.config.config_vault import LOG_FILE, LOG_LEVEL, UTF8


def setup_logging(log_file=LOG_FILE, level: str = LOG_LEVEL) -> None:
    """
    Route log records to the error log and install the uncaught exception hook.

    Does nothing if the root logger already has handlers, so repeated calls
    (or a host application's own configuration) win.
    """
    if logging.getLogger().handlers:
        return  # already configured

    log_file = os.fspath(log_file)
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    logging.basicConfig(
        filename=log_file,
        filemode="a",
        encoding=UTF8,
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
    )

    sys.excepthook = log_uncaught_exceptions


def log_uncaught_exceptions(exctype, value, tb):
    """
    Record a crash in the error log instead of dumping a traceback.

    Only file basenames, line numbers and function names are written;
    frame locals (which may hold the master password) never are.
    """
    frames = [
        f'  File "{os.path.basename(frame.filename)}", line {frame.lineno}, in {frame.name}'
        for frame in traceback.extract_tb(tb)
    ] or ["  <no traceback>"]
    error_msg = f"{exctype.__name__}: {value}"

    logging.error(
        f"[{pendulum.now().to_iso8601_string()}] PassgenX crashed: {error_msg}\n"
        "Traceback (most recent call last):\n"
        + "\n".join(frames)
        + f"\n{error_msg}\n"
    )

    print("\nPassgenX hit an unexpected error and stopped.", file=sys.stderr)
    print(f"Details were written to {LOG_FILE}\n", file=sys.stderr)
