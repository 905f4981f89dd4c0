from typing import Any, Optional

from .protocols import Renderer
from .store import MessageStore


class MessageBus:
    """
    Routes user-facing messages to the active renderer.

    Without a renderer every message is dropped, so library code can report
    freely whether or not a front-end is attached.
    """

    def __init__(self, store: MessageStore):
        self._store = store
        self._renderer: Optional[Renderer] = None

    @property
    def store(self) -> MessageStore:
        return self._store

    def set_renderer(self, renderer: Optional[Renderer]) -> None:
        self._renderer = renderer

    def _render(self, level: str, msg_id: str, **kwargs: Any) -> None:
        if self._renderer is None:
            return
        self._renderer.render(self._store.get(msg_id, **kwargs), level)

    def render_to_string(self, msg_id: str, **kwargs: Any) -> str:
        return self._store.get(msg_id, **kwargs)

    def debug(self, msg_id: str, **kwargs: Any) -> None:
        self._render("debug", msg_id, **kwargs)

    def info(self, msg_id: str, **kwargs: Any) -> None:
        self._render("info", msg_id, **kwargs)

    def success(self, msg_id: str, **kwargs: Any) -> None:
        self._render("success", msg_id, **kwargs)

    def warning(self, msg_id: str, **kwargs: Any) -> None:
        self._render("warning", msg_id, **kwargs)

    def error(self, msg_id: str, **kwargs: Any) -> None:
        self._render("error", msg_id, **kwargs)
