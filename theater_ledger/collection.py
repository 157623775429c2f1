"""In-memory script collection and the views derived from it.

The collection is a versioned snapshot replaced wholesale on every reload;
nothing here mutates it. All derivations are pure functions so the
presentation layer can recompute them on each render.
"""

import math
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict

from theater_ledger.scripts import Script, ScriptStatus

DEFAULT_PAGE_SIZE = 5
DEFAULT_TOP_THEMES = 5


@dataclass(frozen=True, slots=True)
class ScriptCollection:
    """Snapshot of the ledger's scripts, newest first."""

    version: int = 0
    scripts: tuple[Script, ...] = ()
    loaded_at: datetime | None = None

    def __len__(self) -> int:
        return len(self.scripts)

    def get(self, script_id: str) -> Script | None:
        return next((s for s in self.scripts if s.id == script_id), None)

    def next_version(self, scripts: Iterable[Script]) -> "ScriptCollection":
        return ScriptCollection(
            version=self.version + 1,
            scripts=sort_scripts(scripts),
            loaded_at=datetime.now(UTC),
        )


class Page(BaseModel):
    """One page of a filtered collection. Page numbers start at 1."""

    model_config = ConfigDict(frozen=True)

    items: tuple[Script, ...]
    page: int
    page_size: int
    total_items: int
    total_pages: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


class ThemeCount(BaseModel):
    model_config = ConfigDict(frozen=True)

    theme: str
    count: int


class StatusCounts(BaseModel):
    model_config = ConfigDict(frozen=True)

    pending: int = 0
    analyzed: int = 0
    archived: int = 0

    @property
    def total(self) -> int:
        return self.pending + self.analyzed + self.archived


def sort_scripts(scripts: Iterable[Script]) -> tuple[Script, ...]:
    """Newest first by created_at. Stable, so equal timestamps keep index order."""
    return tuple(sorted(scripts, key=lambda s: s.created_at, reverse=True))


def matches(script: Script, term: str) -> bool:
    """Case-insensitive substring match on title, era or any theme."""
    needle = term.lower()
    if needle in script.title.lower() or needle in script.era.lower():
        return True
    return any(needle in theme.lower() for theme in script.themes)


def search(scripts: Sequence[Script], term: str) -> list[Script]:
    """Filter scripts by term, preserving order. An empty term matches everything."""
    if not term:
        return list(scripts)
    return [s for s in scripts if matches(s, term)]


def total_pages(count: int, page_size: int) -> int:
    """Number of pages for count items, at least 1 so clamping always has a target."""
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return max(1, math.ceil(count / page_size))


def paginate(scripts: Sequence[Script], page: int, page_size: int = DEFAULT_PAGE_SIZE) -> Page:
    """Slice one page. Out-of-range page numbers are clamped, never an error."""
    pages = total_pages(len(scripts), page_size)
    current = min(max(page, 1), pages)
    start = (current - 1) * page_size
    return Page(
        items=tuple(scripts[start : start + page_size]),
        page=current,
        page_size=page_size,
        total_items=len(scripts),
        total_pages=pages,
    )


def theme_distribution(scripts: Iterable[Script], top_n: int = DEFAULT_TOP_THEMES) -> list[ThemeCount]:
    """Count themes of analyzed scripts, most frequent first.

    Ties keep the order in which the themes were first seen. ``top_n`` of 0
    yields an empty list; a negative ``top_n`` is rejected.
    """
    if top_n < 0:
        raise ValueError(f"top_n must not be negative, got {top_n}")
    counts: Counter[str] = Counter()
    for script in scripts:
        if script.status is ScriptStatus.ANALYZED:
            counts.update(script.themes)
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [ThemeCount(theme=theme, count=count) for theme, count in ranked[:top_n]]


def status_counts(scripts: Iterable[Script]) -> StatusCounts:
    tally = Counter(s.status for s in scripts)
    return StatusCounts(
        pending=tally[ScriptStatus.PENDING],
        analyzed=tally[ScriptStatus.ANALYZED],
        archived=tally[ScriptStatus.ARCHIVED],
    )


@dataclass(slots=True)
class CollectionView:
    """Search term, page size and theme limit applied to one collection snapshot."""

    collection: ScriptCollection = field(default_factory=ScriptCollection)
    search_term: str = ""
    page_size: int = DEFAULT_PAGE_SIZE
    top_themes: int = DEFAULT_TOP_THEMES

    def filtered(self) -> list[Script]:
        return search(self.collection.scripts, self.search_term)

    def page(self, number: int = 1) -> Page:
        return paginate(self.filtered(), number, self.page_size)

    def pages(self) -> list[Page]:
        """Every page of the filtered collection, in order."""
        filtered = self.filtered()
        return [paginate(filtered, n, self.page_size) for n in range(1, total_pages(len(filtered), self.page_size) + 1)]

    def themes(self) -> list[ThemeCount]:
        return theme_distribution(self.collection.scripts, self.top_themes)

    def stats(self) -> StatusCounts:
        return status_counts(self.collection.scripts)
