from contextlib import contextmanager
from typing import Any, Dict, List, Optional


class SpyRenderer:
    def __init__(self):
        self.messages: List[Dict[str, Any]] = []

    def render(self, message: str, level: str) -> None:
        # The spy records in record(); this only satisfies the interface
        pass

    def record(self, level: str, msg_id: str, params: Dict[str, Any]) -> None:
        self.messages.append({"level": level, "id": msg_id, "params": params})


class SpyBus:
    def __init__(self):
        self._spy_renderer = SpyRenderer()

    @contextmanager
    def patch(self, monkeypatch: Any, target: str = "retype.common.bus"):
        # Lazy import so collection does not load the package early
        import retype.common

        real_bus = retype.common.bus

        def intercept_render(level: str, msg_id: str, **kwargs: Any) -> None:
            self._spy_renderer.record(level, msg_id, kwargs)

        monkeypatch.setattr(real_bus, "_render", intercept_render)
        monkeypatch.setattr(real_bus, "_renderer", self._spy_renderer)

        yield self

    def get_messages(self) -> List[Dict[str, Any]]:
        return self._spy_renderer.messages

    def assert_id_called(self, msg_id: str, level: Optional[str] = None) -> None:
        for msg in self.get_messages():
            if msg["id"] == msg_id and (level is None or msg["level"] == level):
                return
        ids_seen = [m["id"] for m in self.get_messages()]
        raise AssertionError(f"Message with ID '{msg_id}' was not sent.\nCaptured IDs: {ids_seen}")

    def assert_id_not_called(self, msg_id: str) -> None:
        if any(msg["id"] == msg_id for msg in self.get_messages()):
            raise AssertionError(f"Message with ID '{msg_id}' was sent unexpectedly.")
