from pathlib import Path

from .messaging import MessageBus, MessageStore

_assets_root = Path(__file__).parent / "assets"

bus = MessageBus(MessageStore.from_directory(_assets_root))

__all__ = ["bus"]
