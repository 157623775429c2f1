"""Tests for the collection snapshot and its derived views."""

import pytest

from tests.support.helpers import make_script
from theater_ledger.collection import (
    CollectionView,
    ScriptCollection,
    matches,
    paginate,
    search,
    sort_scripts,
    status_counts,
    theme_distribution,
    total_pages,
)
from theater_ledger.scripts import ScriptStatus

ANALYZED = ScriptStatus.ANALYZED


def _library():
    return [
        make_script("1", title="Hamlet", era="Elizabethan", created_at=100, status=ANALYZED, themes=("Love", "Power")),
        make_script("2", title="Medea", era="Ancient", created_at=300, status=ANALYZED, themes=("Betrayal",)),
        make_script("3", title="Tartuffe", era="Restoration", created_at=200),
        make_script("4", title="Everyman", era="Medieval", created_at=400, status=ScriptStatus.ARCHIVED, themes=("Death",)),
    ]


class TestSort:
    def test_newest_first(self):
        assert [s.id for s in sort_scripts(_library())] == ["4", "2", "3", "1"]

    def test_equal_timestamps_keep_input_order(self):
        scripts = [make_script("a", created_at=5), make_script("b", created_at=5), make_script("c", created_at=9)]
        assert [s.id for s in sort_scripts(scripts)] == ["c", "a", "b"]


class TestSearch:
    def test_empty_term_matches_all(self):
        assert len(search(_library(), "")) == 4

    @pytest.mark.parametrize(
        ("term", "expected"),
        [
            ("hAmL", ["1"]),
            ("ancient", ["2"]),
            ("love", ["1"]),
            ("e", ["1", "2", "3", "4"]),
            ("death", ["4"]),
            ("comedy", []),
        ],
    )
    def test_matches_title_era_or_theme(self, term: str, expected: list[str]):
        assert [s.id for s in search(_library(), term)] == expected

    def test_matches_agrees_with_substring_definition(self):
        for script in _library():
            for term in ("a", "AN", "power", "xyz", "Eliz"):
                fields = [script.title, script.era, *script.themes]
                assert matches(script, term) == any(term.lower() in f.lower() for f in fields)


class TestPagination:
    def test_total_pages(self):
        assert total_pages(0, 5) == 1
        assert total_pages(5, 5) == 1
        assert total_pages(6, 5) == 2

    def test_invalid_page_size(self):
        with pytest.raises(ValueError):
            total_pages(3, 0)

    def test_clamps_out_of_range(self):
        scripts = [make_script(str(i), created_at=i) for i in range(7)]
        assert paginate(scripts, 0, 5).page == 1
        last = paginate(scripts, 99, 5)
        assert last.page == 2
        assert [s.id for s in last.items] == ["5", "6"]
        assert last.has_previous and not last.has_next

    def test_empty_collection(self):
        page = paginate([], 3, 5)
        assert page.page == 1
        assert page.items == ()
        assert page.total_pages == 1

    @pytest.mark.parametrize("count", [0, 1, 4, 5, 6, 11, 23])
    @pytest.mark.parametrize("size", [1, 3, 5, 10])
    def test_pages_reconstruct_collection(self, count: int, size: int):
        scripts = [make_script(str(i), created_at=i) for i in range(count)]
        view = CollectionView(ScriptCollection(1, sort_scripts(scripts)), page_size=size)
        rebuilt = [s.id for page in view.pages() for s in page.items]
        assert rebuilt == [s.id for s in view.filtered()]
        assert len(rebuilt) == len(set(rebuilt)) == count


class TestThemeDistribution:
    def test_counts_analyzed_only(self):
        scripts = [
            make_script("1", status=ANALYZED, themes=("Love", "Power")),
            make_script("2", status=ANALYZED, themes=("Love",)),
            make_script("3", status=ANALYZED, themes=("Betrayal",)),
        ]
        result = [(t.theme, t.count) for t in theme_distribution(scripts)]
        assert result == [("Love", 2), ("Power", 1), ("Betrayal", 1)]

    def test_ignores_pending_and_archived(self):
        assert [t.theme for t in theme_distribution(_library())] == ["Love", "Power", "Betrayal"]

    def test_ties_keep_first_seen_order(self):
        scripts = [
            make_script("1", status=ANALYZED, themes=("Fate", "Honor")),
            make_script("2", status=ANALYZED, themes=("Honor", "Fate", "Exile")),
        ]
        assert [t.theme for t in theme_distribution(scripts)] == ["Fate", "Honor", "Exile"]

    def test_top_n(self):
        scripts = [make_script("1", status=ANALYZED, themes=tuple(f"T{i}" for i in range(8)))]
        assert len(theme_distribution(scripts, top_n=5)) == 5

    def test_zero_top_n_is_empty(self):
        scripts = [make_script("1", status=ANALYZED, themes=("A", "B", "C"))]
        assert theme_distribution(scripts, top_n=0) == []

    def test_negative_top_n_rejected(self):
        scripts = [make_script("1", status=ANALYZED, themes=("A", "B", "C"))]
        with pytest.raises(ValueError, match="top_n"):
            theme_distribution(scripts, top_n=-1)


class TestStatusCounts:
    def test_counts(self):
        counts = status_counts(_library())
        assert (counts.pending, counts.analyzed, counts.archived, counts.total) == (1, 2, 1, 4)


class TestScriptCollection:
    def test_next_version_sorts_and_bumps(self):
        first = ScriptCollection().next_version(_library())
        second = first.next_version(first.scripts)
        assert (first.version, second.version) == (1, 2)
        assert second.scripts == first.scripts
        assert first.loaded_at is not None

    def test_get(self):
        collection = ScriptCollection().next_version(_library())
        assert collection.get("3").title == "Tartuffe"
        assert collection.get("missing") is None


class TestCollectionView:
    def test_view_combines_search_and_paging(self):
        view = CollectionView(ScriptCollection().next_version(_library()), search_term="e", page_size=3)
        assert [s.id for s in view.page(1).items] == ["4", "2", "3"]
        assert [s.id for s in view.page(2).items] == ["1"]
        assert view.stats().analyzed == 2
        assert view.themes()[0].theme == "Love"
