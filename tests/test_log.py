import logging

from rich.console import Console
from rich.logging import RichHandler

from skillsync.log import configure_logging


def test_configure_logging_replaces_rich_handler() -> None:
    configure_logging()
    logger = configure_logging(verbose=True)

    handlers = [h for h in logger.handlers if isinstance(h, RichHandler)]
    assert len(handlers) == 1
    assert logger.level == logging.DEBUG

    assert configure_logging().level == logging.WARNING


def test_log_records_reach_console() -> None:
    console = Console(record=True, width=120)
    configure_logging(console=console)

    logging.getLogger("skillsync.validation.pipeline").warning("target looks odd")

    assert "target looks odd" in console.export_text()
