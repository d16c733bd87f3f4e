from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import yaml


@dataclass(frozen=True)
class Passage:
    key: str
    title: str
    text: str


class PassageRepository:
    """Ordered, read-only catalog of reference passages."""

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        if base_dir is None:
            base_dir = Path(__file__).resolve().parent.parent / "data" / "passages"
        self._base_dir = base_dir
        self._passages = self._load_passages()

    def __len__(self) -> int:
        return len(self._passages)

    def all(self) -> List[Passage]:
        return list(self._passages)

    def labels(self) -> List[str]:
        """Selection labels, one per passage: "Passage 1", "Passage 2", ..."""
        return [f"Passage {i + 1}" for i in range(len(self._passages))]

    def normalize_index(self, index) -> int:
        """Return *index* as a valid position, or 0 if it is unusable."""
        try:
            i = int(index)
        except (TypeError, ValueError, OverflowError):
            return 0
        return i if 0 <= i < len(self._passages) else 0

    def get(self, index) -> Passage:
        """Return the passage at *index*, or the first one if the index is unusable."""
        return self._passages[self.normalize_index(index)]

    def _load_passages(self) -> List[Passage]:
        base_dir = self._base_dir
        if not base_dir.exists():
            raise FileNotFoundError(f"Passages directory not found: {base_dir}")

        def _sort_key(p: Path) -> tuple[int, str]:
            m = re.match(r"^passage(\d+)$", p.stem)
            if m:
                return (int(m.group(1)), p.stem)
            return (10**9, p.stem)

        passages: List[Passage] = []
        for path in sorted(base_dir.glob("passage*.yaml"), key=_sort_key):
            raw = yaml.safe_load(path.read_text(encoding="utf-8"))
            if not raw or not isinstance(raw, dict):
                raise ValueError(f"{path.name}: expected YAML with 'title' and 'content'")
            title = raw.get("title")
            content = raw.get("content")
            if not title or not isinstance(title, str):
                raise ValueError(f"{path.name}: missing or invalid 'title'")
            if content is None:
                raise ValueError(f"{path.name}: missing 'content'")
            # newlines inside a passage are part of the text to reproduce
            text = str(content).strip()
            if not text:
                raise ValueError(f"{path.name}: 'content' is empty")
            passages.append(Passage(key=path.stem, title=title.strip(), text=text))

        if not passages:
            raise ValueError(f"No passage files (passage*.yaml) found in {base_dir}")
        return passages
