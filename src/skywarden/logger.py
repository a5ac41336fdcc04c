import logging

from rich.logging import RichHandler


def setup_logger(name: str = "skywarden", level: int | str = logging.INFO) -> logging.Logger:
    """
    Returns the guardian's logger, attaching a RichHandler on first use.
    Later calls only change the level, so the entry point can apply
    LOG_LEVEL after the module-level logger already exists.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        # Messages carry backticks and brackets meant for the relay,
        # not rich markup. The process runs under systemd/docker, which
        # timestamp lines themselves, so only the level is shown.
        handler = RichHandler(
            rich_tracebacks=True, markup=False, show_time=False, show_path=False
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.propagate = False

    return logger


logger = setup_logger()
