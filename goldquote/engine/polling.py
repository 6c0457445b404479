"""
Polling — опрос статуса внешнего провайдера (платёж, bridge, swap)

Контракт:
- опрос с фиксированным интервалом
- остановка на терминальном статусе или по достижении лимита попыток
- ожидание освобождается на любом выходе (успех, ошибка, таймаут, stop())

Сетевые вызовы не входят в модуль: fetch_status передаёт вызывающий код.
"""

import threading
import time
from typing import Callable, Final, Generic, TypeVar

from loguru import logger

from goldquote.core.math.numerical_safeguards import validate_non_negative

T = TypeVar("T")

DEFAULT_POLL_INTERVAL_S: Final[float] = 2.0
DEFAULT_MAX_ATTEMPTS: Final[int] = 30


class PollingTimeout(TimeoutError):
    """Терминальный статус не получен за max_attempts попыток."""

    def __init__(self, attempts: int, last_status: object = None):
        super().__init__(f"no terminal status after {attempts} attempts (last={last_status!r})")
        self.attempts = attempts
        self.last_status = last_status


class PollingCancelled(RuntimeError):
    """Опрос остановлен через StatusPoller.stop()."""


def _validate_poll_params(interval_s: float, max_attempts: int) -> None:
    validate_non_negative(interval_s, "interval_s")
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")


def poll_until(
    fetch_status: Callable[[], T],
    is_terminal: Callable[[T], bool],
    interval_s: float = DEFAULT_POLL_INTERVAL_S,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Синхронный опрос статуса.

    Между попытками вызывается sleep(interval_s); после последней попытки
    ожидания нет. Исключения fetch_status пробрасываются без повторов.

    Returns:
        Первый терминальный статус

    Raises:
        PollingTimeout: Если терминальный статус не получен
    """
    _validate_poll_params(interval_s, max_attempts)

    status = None
    for attempt in range(1, max_attempts + 1):
        status = fetch_status()
        if is_terminal(status):
            logger.debug(f"poll_terminal attempt={attempt} status={status!r}")
            return status

        logger.debug(f"poll_pending attempt={attempt}/{max_attempts} status={status!r}")
        if attempt < max_attempts:
            sleep(interval_s)

    logger.warning(f"poll_timeout attempts={max_attempts} last_status={status!r}")
    raise PollingTimeout(max_attempts, status)


class StatusPoller(Generic[T]):
    """
    Опрос с возможностью остановки из другого потока.

    Ожидание между попытками — threading.Event.wait, поэтому stop()
    прерывает его сразу.
    """

    def __init__(
        self,
        fetch_status: Callable[[], T],
        is_terminal: Callable[[T], bool],
        interval_s: float = DEFAULT_POLL_INTERVAL_S,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        _validate_poll_params(interval_s, max_attempts)
        self._fetch_status = fetch_status
        self._is_terminal = is_terminal
        self._interval_s = interval_s
        self._max_attempts = max_attempts
        self._stop = threading.Event()

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def stop(self) -> None:
        """Остановить опрос (ожидание прерывается немедленно)."""
        self._stop.set()

    def _sleep(self, interval_s: float) -> None:
        if self._stop.wait(interval_s):
            raise PollingCancelled("polling stopped")

    def run(self) -> T:
        """
        Запуск опроса.

        Raises:
            PollingTimeout: лимит попыток исчерпан
            PollingCancelled: вызван stop()
        """
        if self._stop.is_set():
            raise PollingCancelled("polling stopped before start")

        try:
            return poll_until(
                self._fetch_status,
                self._is_terminal,
                interval_s=self._interval_s,
                max_attempts=self._max_attempts,
                sleep=self._sleep,
            )
        finally:
            self._stop.set()
