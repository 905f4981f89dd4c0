import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

log = logging.getLogger(__name__)

DEFAULT_LANG = "en"


def detect_lang() -> str:
    """Language from RETYPE_LANG, then LANG (en_US.UTF-8 -> en), then English."""
    env_lang = os.getenv("RETYPE_LANG")
    if env_lang:
        return env_lang
    sys_lang = os.getenv("LANG")
    if sys_lang:
        base_lang = sys_lang.split(".")[0].split("_")[0]
        if base_lang and base_lang not in ("C", "POSIX"):
            return base_lang
    return DEFAULT_LANG


def _flatten(data: Dict[str, Any], prefix: str, out: Dict[str, str]) -> None:
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            _flatten(value, full_key, out)
        else:
            out[full_key] = str(value)


class MessageStore:
    """
    Message templates keyed by dotted ids, e.g. "rename.run.success".

    Templates are `str.format` strings. A missing id renders as the id itself.
    """

    def __init__(self, messages: Optional[Dict[str, str]] = None):
        self._messages: Dict[str, str] = dict(messages or {})

    @classmethod
    def from_directory(cls, assets_root: Path, lang: Optional[str] = None) -> "MessageStore":
        lang = lang or detect_lang()
        lang_dir = assets_root / lang
        if not lang_dir.is_dir():
            lang_dir = assets_root / DEFAULT_LANG

        messages: Dict[str, str] = {}
        for path in sorted(lang_dir.glob("*.json")):
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as e:
                log.warning("Could not load message file %s: %s", path, e)
                continue
            _flatten(data, "", messages)
        return cls(messages)

    def get(self, msg_id: str, **kwargs: Any) -> str:
        template = self._messages.get(msg_id)
        if template is None:
            return msg_id
        try:
            return template.format(**kwargs)
        except (KeyError, IndexError, ValueError):
            return template

    def __contains__(self, msg_id: str) -> bool:
        return msg_id in self._messages
