"""
Logging — structlog поверх stdlib logging для пакета rpncalc

Пакет ничего не выводит, пока приложение не вызовет configure_logging():
- Модули берут логгер через get_logger(__name__): structlog.stdlib.BoundLogger
  поверх logging.getLogger(name), поэтому вывод и уровни решает stdlib,
  а не PrintLogger structlog по умолчанию
- Логгер "rpncalc" получает NullHandler при импорте: без конфигурации
  записи не доходят до logging.lastResort
- configure_logging() вешает один обработчик (console или JSON) на логгер
  "rpncalc" и не трогает root logger приложения

События именуются через точку: value.promoted, value.load_skipped,
context.load_failed, rational.gcd_iteration_limit.
"""

import logging
import sys
from typing import Final, TextIO

import structlog

PACKAGE_LOGGER: Final[str] = "rpncalc"

# Имя обработчика configure_logging (повторный вызов заменяет его)
HANDLER_NAME: Final[str] = "rpncalc.output"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Логгер модуля rpncalc.

    Обёртка ленивая: процессоры берутся из текущей конфигурации structlog
    при каждом событии, поэтому structlog.testing.capture_logs и поздний
    configure_logging() видят события модулей, импортированных раньше.

    Args:
        name: Имя stdlib-логгера (обычно __name__ модуля)
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
    )


# =============================================================================
# КОНФИГУРАЦИЯ ВЫВОДА
# =============================================================================


def _pre_chain() -> list[structlog.types.Processor]:
    """Процессоры, общие для событий structlog и обычных записей stdlib."""
    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]


def _renderer(log_json: bool, stream: TextIO) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer(colors=stream.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
) -> logging.Handler:
    """
    Включение вывода событий rpncalc.

    События ниже уровня пакета отбрасываются первым процессором
    (filter_by_level), до рендера. Повторный вызов заменяет обработчик.

    Args:
        verbose: DEBUG вместо WARNING для логгеров rpncalc
        log_json: JSON-строки вместо консольного рендера
        stream: Поток вывода (по умолчанию sys.stderr)

    Returns:
        Установленный обработчик (имя HANDLER_NAME)
    """
    stream = sys.stderr if stream is None else stream
    pre_chain = _pre_chain()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *pre_chain,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json, stream),
            ],
        )
    )

    package = logging.getLogger(PACKAGE_LOGGER)
    for existing in [h for h in package.handlers if h.get_name() == HANDLER_NAME]:
        package.removeHandler(existing)
    package.addHandler(handler)
    package.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package.propagate = False
    return handler
