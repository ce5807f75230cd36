import sys
from tqdm import tqdm
import logging

FORMAT = '%(asctime)s %(levelname)s - %(message)s'
FORMATTER = logging.Formatter(FORMAT, datefmt="%d-%m-%Y %H:%M:%S")


class TqdmLoggingHandler(logging.Handler):
    """Route log records through `tqdm.write` so they do not break progress bars."""
    def __init__(self, level=logging.NOTSET):
        super().__init__(level)
        self.setFormatter(FORMATTER)

    def emit(self, record):
        try:
            msg = self.format(record)
            tqdm.write(msg)
            self.flush()
        except Exception:
            self.handleError(record)


def use_stdout(logger: logging.Logger, *, progress: bool=False) -> logging.Handler:
    """Replace the handlers of `logger` with one writing to stdout.

    Parameters:
        logger (Logger): the logger to reconfigure, usually `sparselab.logger`.
        progress (bool, optional): use a `TqdmLoggingHandler` so that records
            emitted inside a tqdm loop keep the bar intact. Defaults to False.

    Returns:
        Handler: the handler now attached to the logger.
    """
    for h in list(logger.handlers):
        logger.removeHandler(h)

    if progress:
        handler = TqdmLoggingHandler()
    else:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(FORMATTER)

    logger.addHandler(handler)
    logger.propagate = False
    return handler
