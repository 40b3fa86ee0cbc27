from __future__ import annotations

import logging

PACKAGE_LOGGER = "ibeakit"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(component)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


class ComponentFormatter(logging.Formatter):
    """Formatter that shows the emitting module relative to ``ibeakit``.

    ``ibeakit.engine.algorithm.ibea.selection`` is rendered as
    ``ibea.selection``; records from outside the package keep their name.
    """

    def __init__(self, fmt: str = LOG_FORMAT, datefmt: str = DATE_FORMAT) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)

    @staticmethod
    def component(name: str) -> str:
        parts = name.split(".")
        if parts[0] != PACKAGE_LOGGER or len(parts) == 1:
            return name
        if parts[1:3] == ["engine", "algorithm"] and len(parts) > 3:
            return ".".join(parts[3:])
        return ".".join(parts[1:])

    def format(self, record: logging.LogRecord) -> str:
        record.component = self.component(record.name)
        return super().format(record)


def configure_ibeakit_logging(*, level: int = logging.INFO) -> logging.Handler | None:
    """
    Attach a console handler with ``ComponentFormatter`` to the ``ibeakit`` logger.

    Opt-in only; library modules never configure handlers. Nothing is attached
    when the root logger or the package logger already has handlers, and
    ``None`` is returned in that case.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if logging.getLogger().handlers or package_logger.handlers:
        return None

    handler = logging.StreamHandler()
    handler.setFormatter(ComponentFormatter())
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False
    return handler


__all__ = ["PACKAGE_LOGGER", "ComponentFormatter", "configure_ibeakit_logging"]
