"""
Append-only store of discovered articles.

Articles live in a flat list; each one records the index of the article
whose page first linked to it.  Index 0 is a sentinel that terminates the
parent chain, index 1 is the start article.
"""

from typing import Iterator

SENTINEL = 0
ROOT = 1


class ArticleRegistry:
    """Deduplicated, indexed article store with parent pointers."""

    def __init__(self, start: str) -> None:
        self._identifiers: list[str | None] = [None, start]
        self._parents: list[int] = [SENTINEL, SENTINEL]
        self._index: dict[str, int] = {start: ROOT}

    def __len__(self) -> int:
        """Number of real articles (the sentinel is not counted)."""
        return len(self._identifiers) - 1

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._index

    def index_of(self, identifier: str) -> int | None:
        return self._index.get(identifier)

    def identifier(self, index: int) -> str:
        self._check_index(index)
        return self._identifiers[index]  # type: ignore[return-value]

    def parent(self, index: int) -> int:
        self._check_index(index)
        return self._parents[index]

    def identifiers(self) -> Iterator[str]:
        """All articles in discovery order, start first."""
        for ident in self._identifiers[ROOT:]:
            yield ident  # type: ignore[misc]

    def insert_if_new(self, identifier: str, parent_index: int) -> int | None:
        """Append *identifier* as a child of *parent_index*.

        Returns the new index, or ``None`` without touching anything when
        the identifier is already known (first discovery wins).
        """
        if identifier in self._index:
            return None
        self._check_index(parent_index)
        index = len(self._identifiers)
        self._identifiers.append(identifier)
        self._parents.append(parent_index)
        self._index[identifier] = index
        return index

    def path_to(self, index: int) -> list[str]:
        """Identifiers from the start article to *index*, inclusive."""
        self._check_index(index)
        path: list[str] = []
        current = index
        while current != SENTINEL:
            path.append(self._identifiers[current])  # type: ignore[arg-type]
            current = self._parents[current]
        path.reverse()
        return path

    def _check_index(self, index: int) -> None:
        if not ROOT <= index < len(self._identifiers):
            raise ValueError(f"no article at index {index}")
