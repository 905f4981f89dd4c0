from typing import Protocol


class Renderer(Protocol):
    """
    Receives fully formatted messages from the bus and presents them.
    """

    def render(self, message: str, level: str) -> None: ...
