"""Single owner of the virtual camera session state."""

from __future__ import annotations

from typing import Awaitable, Callable, Optional

from procam.core.logging_utils import LoggerLike, ensure_structured_logger

from .actions import Action
from .effects import Effect
from .state import AppState, initial_state
from .update import update

Dispatch = Callable[[Action], Awaitable[None]]
EffectHandler = Callable[[Effect, Dispatch], Awaitable[None]]


class Store:
    """Holds the one ``AppState`` and runs the reducer.

    ``dispatch`` awaits each effect in order; an effect that raises is logged
    and the effects after it still run. ``dispatch_sync`` serves gesture paths
    that must not yield and only emit actions without effects.
    """

    def __init__(self, initial: Optional[AppState] = None, *, logger: LoggerLike = None) -> None:
        self._state = initial if initial is not None else initial_state()
        self._effect_handler: Optional[EffectHandler] = None
        self._logger = ensure_structured_logger(logger, fallback_name=__name__)

    @property
    def state(self) -> AppState:
        return self._state

    def set_effect_handler(self, handler: EffectHandler) -> None:
        self._effect_handler = handler

    async def dispatch(self, action: Action) -> None:
        effects = self._reduce(action)
        if self._effect_handler is None:
            return
        for effect in effects:
            try:
                await self._effect_handler(effect, self.dispatch)
            except Exception:
                self._logger.exception("Effect %s failed", type(effect).__name__)

    def dispatch_sync(self, action: Action) -> None:
        effects = self._reduce(action)
        if effects:
            self._logger.warning(
                "Dropped %d effect(s) of synchronous %s", len(effects), type(action).__name__
            )

    def _reduce(self, action: Action) -> list[Effect]:
        self._state, effects = update(self._state, action)
        return effects


def create_store(initial: Optional[AppState] = None, *, logger: LoggerLike = None) -> Store:
    return Store(initial, logger=logger)
