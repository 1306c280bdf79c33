import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
HANDLER_NAME = "pasties"


def configure_logging(level: str = "INFO") -> None:
    """Настройка корневого логгера приложения"""
    root = logging.getLogger()
    root.setLevel(level.upper())

    # Повторный вызов (например, в тестах) не должен дублировать вывод
    for handler in root.handlers:
        if handler.get_name() == HANDLER_NAME:
            return

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
