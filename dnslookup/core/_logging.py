import logging
import sys

from loguru import logger
from rich.traceback import install as rich_tb_install

LIB_NAME = 'dnslookup'

_LOG_FORMAT = (
    '<green>{time:YYYY-MM-DD HH:mm:ss}</green> | '
    '<level>{level: <8}</level> | '
    '<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - '
    '<level>{message}</level>'
)

_NOISEY_LOGGERS = (
    'httpx',
    'httpcore',
    'hpack',
    'asyncio',
)


class _InterceptHandler(logging.Handler):
    """
    Sends stdlib log records (httpx, httpcore...) through loguru so
    everything ends up in the same sink.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore[assignment]
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def configure_lib_logger(
    *,
    level_name: str = "INFO",
    rich_tracebacks: bool = False,
) -> None:
    '''
    Configures logging when dnslookup runs from the CLI or interactively,
    the library is otherwise silent.

    Parameters
    ----------
    level_name : str, optional
        by default "INFO"
    rich_tracebacks : bool, optional
        by default False
    '''
    level_name = level_name.upper()
    logger.enable(LIB_NAME)

    root_logger = logging.getLogger()
    root_logger.handlers = [_InterceptHandler()]
    root_logger.setLevel(level_name)

    for handle in _NOISEY_LOGGERS:
        noisey = logging.getLogger(handle)
        noisey.handlers = [_InterceptHandler()]
        # the transport libraries only get to speak when debugging
        noisey.setLevel(level_name if level_name == 'DEBUG' else 'WARNING')
        noisey.propagate = False

    logger.remove()
    logger.add(
        sys.stderr,
        format=_LOG_FORMAT,
        level=level_name,
        colorize=True,
        backtrace=False,
        diagnose=False,
        catch=True,
    )
    if rich_tracebacks:
        rich_tb_install(show_locals=True, word_wrap=True)

    logger.debug('dnslookup logger configured.')


def disable_lib_logger() -> None:
    '''
    Turns off dnslookup logging for when it is used as a library.
    '''
    logger.disable(LIB_NAME)
    logging.getLogger().handlers = []
    for handle in _NOISEY_LOGGERS:
        logging.getLogger(handle).handlers = []
