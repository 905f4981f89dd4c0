from .bus import MessageBus
from .protocols import Renderer
from .store import MessageStore

__all__ = ["MessageBus", "MessageStore", "Renderer"]
