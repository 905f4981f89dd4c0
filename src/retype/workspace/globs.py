import os
import re
from pathlib import Path
from typing import Iterable, Iterator, List, Pattern, Sequence

DEFAULT_INCLUDE = ("**/*.ts", "**/*.tsx")

DEFAULT_EXCLUDE = (
    "**/node_modules/**",
    "**/dist/**",
    "**/build/**",
    "**/*.d.ts",
    "**/*.test.ts",
    "**/*.spec.ts",
    "**/*.test.tsx",
    "**/*.spec.tsx",
)


def translate(pattern: str) -> str:
    """
    Translate a glob into an anchored regular expression.

    `**/` matches zero or more whole directories, `**` matches anything,
    `*` and `?` never cross a `/`.
    """
    pattern = pattern.replace("\\", "/")
    while pattern.startswith("./"):
        pattern = pattern[2:]

    out: List[str] = []
    i = 0
    while i < len(pattern):
        if pattern.startswith("**/", i):
            out.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            out.append(".*")
            i += 2
        elif pattern[i] == "*":
            out.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            out.append("[^/]")
            i += 1
        else:
            out.append(re.escape(pattern[i]))
            i += 1
    return "^" + "".join(out) + "$"


class GlobSet:
    """A compiled set of globs matched against root-relative POSIX paths."""

    def __init__(self, patterns: Iterable[str]):
        self.patterns = list(patterns)
        self._compiled: List[Pattern[str]] = [re.compile(translate(p)) for p in self.patterns]

    def matches(self, relative_path: str) -> bool:
        return any(regex.match(relative_path) for regex in self._compiled)

    def matches_dir(self, relative_dir: str) -> bool:
        """True if every path below `relative_dir` is matched."""
        return self.matches(relative_dir + "/")

    def __bool__(self) -> bool:
        return bool(self.patterns)


def walk_files(root: Path, include: GlobSet, exclude: GlobSet) -> Iterator[Path]:
    """
    Yield files under `root` matching `include` and not `exclude`, in sorted
    order. Excluded directories are pruned.
    """
    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)
        rel_dir = current.relative_to(root).as_posix()
        prefix = "" if rel_dir == "." else rel_dir + "/"

        kept = []
        for dirname in sorted(dirnames):
            if dirname.startswith(".git") or exclude.matches_dir(prefix + dirname):
                continue
            kept.append(dirname)
        dirnames[:] = kept

        for filename in sorted(filenames):
            relative = prefix + filename
            if include.matches(relative) and not exclude.matches(relative):
                yield current / filename


def expand_directory_patterns(patterns: Sequence[str], root: Path) -> List[str]:
    """
    tsconfig semantics: an entry without wildcards that names a directory
    stands for everything below it.
    """
    expanded = []
    for pattern in patterns:
        cleaned = pattern.replace("\\", "/").rstrip("/")
        while cleaned.startswith("./"):
            cleaned = cleaned[2:]
        if not any(ch in cleaned for ch in "*?") and (root / cleaned).is_dir():
            cleaned = f"{cleaned}/**/*" if cleaned not in ("", ".") else "**/*"
        expanded.append(cleaned)
    return expanded
