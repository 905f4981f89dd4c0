import json
from pathlib import Path
from typing import Any, Dict, List, Optional


def _toml_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_toml_value(v) for v in value) + "]"
    return json.dumps(value)


class WorkspaceFactory:
    """
    Builds a throwaway TypeScript project on disk.

    Files are queued with the `with_*` methods and written by `build()`.
    """

    def __init__(self, root_path: Path):
        self.root_path = root_path
        self._files: List[Dict[str, Any]] = []
        self._config: Optional[Dict[str, Any]] = None

    def with_source(self, path: str, content: str) -> "WorkspaceFactory":
        self._files.append({"path": path, "content": content})
        return self

    def with_tsconfig(
        self, options: Optional[Dict[str, Any]] = None, path: str = "tsconfig.json"
    ) -> "WorkspaceFactory":
        data = options if options is not None else {"compilerOptions": {"strict": True}}
        self._files.append({"path": path, "content": json.dumps(data, indent=2)})
        return self

    def with_config(self, config: Dict[str, Any]) -> "WorkspaceFactory":
        self._config = config
        return self

    def build(self) -> Path:
        for file_spec in self._files:
            file_path = self.root_path / file_spec["path"]
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(file_spec["content"], encoding="utf-8")

        if self._config is not None:
            lines = [f"{key} = {_toml_value(value)}" for key, value in self._config.items()]
            (self.root_path / "retype.toml").write_text("\n".join(lines) + "\n", encoding="utf-8")
        return self.root_path
