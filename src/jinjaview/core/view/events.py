from __future__ import annotations

"""
View Event Hooks.

A small synchronous event manager plus the three events fired while a
view builds its Jinja2 environment. Listeners can adjust the environment
options, swap the loader, or register globals/filters once the
environment exists.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, DefaultDict, Dict, List, Optional

from jinja2 import BaseLoader, Environment

from jinjaview.domain.constants import EVENT_CONSTRUCT, EVENT_ENVIRONMENT_CONFIG, EVENT_LOADER

if TYPE_CHECKING:
    from jinjaview.core.view.view import JinjaView

logger = logging.getLogger(__name__)

Listener = Callable[[Any], None]


# -----------------------------------------------------------------------------
# EVENTS
# -----------------------------------------------------------------------------

@dataclass
class ConstructEvent:
    """Fired once the environment of a view has been created."""
    view: JinjaView
    environment: Environment
    name: str = field(default=EVENT_CONSTRUCT, init=False)


@dataclass
class EnvironmentConfigEvent:
    """Fired with the resolved environment options; listeners may replace them."""
    config: Dict[str, Any]
    name: str = field(default=EVENT_ENVIRONMENT_CONFIG, init=False)

    def get_config(self) -> Dict[str, Any]:
        return self.config

    def set_config(self, config: Dict[str, Any]) -> None:
        self.config = config


@dataclass
class LoaderEvent:
    """Fired with the default loader; listeners may wrap or replace it."""
    loader: BaseLoader
    result_loader: Optional[BaseLoader] = None
    name: str = field(default=EVENT_LOADER, init=False)

    def set_result_loader(self, loader: BaseLoader) -> None:
        self.result_loader = loader

    def get_result_loader(self) -> BaseLoader:
        return self.result_loader if self.result_loader is not None else self.loader


# -----------------------------------------------------------------------------
# DISPATCH
# -----------------------------------------------------------------------------

class EventManager:
    """
    Registers listeners by event name and calls them in registration order.

    Listener exceptions are not caught.
    """

    def __init__(self) -> None:
        self._listeners: DefaultDict[str, List[Listener]] = defaultdict(list)

    def on(self, name: str, listener: Listener) -> None:
        self._listeners[name].append(listener)

    def off(self, name: str, listener: Listener) -> None:
        if listener in self._listeners.get(name, []):
            self._listeners[name].remove(listener)

    def listeners(self, name: str) -> List[Listener]:
        return list(self._listeners.get(name, []))

    def dispatch(self, event: Any) -> Any:
        """
        Deliver an event to every listener of ``event.name``.

        Returns:
            The same event, possibly modified by listeners.
        """
        for listener in self.listeners(event.name):
            logger.debug(f"Dispatching '{event.name}' to {listener!r}")
            listener(event)
        return event
