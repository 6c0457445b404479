"""
Debouncer — пересчёт котировки с задержкой после ввода пользователя

Семантика cancellable timer (last write wins):
- trigger() отменяет ожидающий таймер и взводит новый
- выполняется только последний вызов, пришедший за delay_s
- cancel() / flush() всегда освобождают таймер

Сам quote engine о времени ничего не знает.
"""

import threading
from typing import Any, Callable, Final

from loguru import logger

from goldquote.core.math.numerical_safeguards import validate_non_negative

# Задержка пересчёта после нажатия клавиши
DEFAULT_DEBOUNCE_S: Final[float] = 0.5


class Debouncer:
    """Cancellable-timer debounce вокруг callback."""

    def __init__(self, callback: Callable[..., Any], delay_s: float = DEFAULT_DEBOUNCE_S):
        validate_non_negative(delay_s, "delay_s")

        self._callback = callback
        self._delay_s = delay_s
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._pending_args: tuple[Any, ...] = ()
        self._pending_kwargs: dict[str, Any] = {}

    @property
    def pending(self) -> bool:
        """Есть ли взведённый таймер"""
        with self._lock:
            return self._timer is not None

    def trigger(self, *args: Any, **kwargs: Any) -> None:
        """Отменить ожидающий вызов и запланировать новый через delay_s."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()

            self._pending_args = args
            self._pending_kwargs = kwargs
            timer = threading.Timer(self._delay_s, self._fire)
            timer.daemon = True
            self._timer = timer
            timer.start()

    def cancel(self) -> None:
        """Отменить ожидающий вызов (например, при закрытии экрана)."""
        with self._lock:
            self._release()

    def flush(self) -> bool:
        """
        Выполнить ожидающий вызов немедленно.

        Returns:
            True если был ожидающий вызов
        """
        with self._lock:
            if self._timer is None:
                return False
            args, kwargs = self._pending_args, self._pending_kwargs
            self._release()

        self._callback(*args, **kwargs)
        return True

    def _release(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._timer = None
        self._pending_args = ()
        self._pending_kwargs = {}

    def _fire(self) -> None:
        with self._lock:
            # Таймер мог быть заменён между срабатыванием и захватом lock
            if self._timer is None or self._timer is not threading.current_thread():
                return
            args, kwargs = self._pending_args, self._pending_kwargs
            self._release()

        try:
            self._callback(*args, **kwargs)
        except Exception:
            logger.exception("debounced callback failed")
            raise
