"""Tests for the query engine: traversal order and result arity."""

import pytest

from frontlens.dom import Document
from frontlens.errors import AmbiguousMatchError, NoMatchError, QueryError
from frontlens.matchers import HasRole, HasText, Not
from frontlens.query import get, get_all, iter_descendants, query


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_TREE = """
<section id="s">
    <div id="d1">
        <button id="b1">One</button>
        <span id="sp">
            <button id="b2">Two</button>
        </span>
    </div>
    <div id="d2">
        <button id="b3">Three</button>
    </div>
</section>
<footer id="f"><a id="a" href="/x">x</a></footer>
"""


class _Any:
    def matches(self, elem) -> bool:
        return True


class _CountingMatcher:
    def __init__(self) -> None:
        self.seen = []

    def matches(self, elem) -> bool:
        self.seen.append(elem)
        return False


def mount(html: str = _TREE):
    return Document().mount(html)


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------

class TestTraversal:
    def test_document_order(self):
        root = mount()
        ids = [e.id for e in iter_descendants(root)]
        assert ids == ["s", "d1", "b1", "sp", "b2", "d2", "b3", "f", "a"]

    def test_root_is_excluded(self):
        root = mount()
        section = root.owner_document.get_element_by_id("s")
        assert section not in list(iter_descendants(section))
        assert [e.id for e in iter_descendants(section)][:1] == ["d1"]

    def test_each_descendant_visited_once(self):
        root = mount()
        counter = _CountingMatcher()
        get_all(root, counter)
        assert len(counter.seen) == len({id(e) for e in counter.seen}) == 9

    def test_leaf_has_no_descendants(self):
        root = mount()
        leaf = root.owner_document.get_element_by_id("b1")
        assert get_all(leaf, _Any()) == []

    def test_traversal_does_not_mutate(self):
        root = mount()
        before = root.outer_html
        get_all(root, HasRole("button") & Not(HasText("Two")))
        assert root.outer_html == before

    def test_scoped_to_subtree(self):
        root = mount()
        d2 = root.owner_document.get_element_by_id("d2")
        assert [e.id for e in d2.get_all(HasRole("button"))] == ["b3"]

    def test_deep_tree(self):
        depth = 500
        root = mount("<div>" * depth + "leaf" + "</div>" * depth)
        assert len(get_all(root, _Any())) == depth


# ---------------------------------------------------------------------------
# get_all / get
# ---------------------------------------------------------------------------

class TestGetAll:
    def test_collects_matches_in_order(self):
        root = mount()
        assert [e.id for e in get_all(root, HasRole("button"))] == ["b1", "b2", "b3"]

    def test_empty_result_is_not_an_error(self):
        root = mount()
        assert get_all(root, HasRole("slider")) == []

    def test_idempotent(self):
        root = mount()
        first = get_all(root, HasRole("button"))
        second = get_all(root, HasRole("button"))
        assert first == second
        assert all(a is b for a, b in zip(first, second))

    def test_method_form(self):
        root = mount()
        assert root.get_all(HasRole("link")) == get_all(root, HasRole("link"))


class TestGet:
    def test_returns_first_in_document_order(self):
        root = mount()
        assert get(root, HasRole("button")).id == "b1"

    def test_returns_none_when_nothing_matches(self):
        root = mount()
        assert get(root, HasRole("slider")) is None
        assert root.get(HasRole("slider")) is None

    def test_agrees_with_get_all(self):
        root = mount()
        for matcher in (HasRole("button"), HasText("Two"), HasRole("link")):
            assert get(root, matcher) is get_all(root, matcher)[0]

    def test_stops_at_first_match(self):
        root = mount()
        counter = _CountingMatcher()
        get(root, HasRole("region") | counter)
        assert len(counter.seen) == 9
        counter = _CountingMatcher()
        get(root, Not(HasRole("missing")) | counter)
        assert counter.seen == []


# ---------------------------------------------------------------------------
# query (strict)
# ---------------------------------------------------------------------------

class TestStrictQuery:
    def test_single_match(self):
        root = mount()
        assert query(root, HasRole("link")).id == "a"
        assert root.query(HasRole("button") & HasText("Three")).id == "b3"

    def test_no_match(self):
        root = mount()
        with pytest.raises(NoMatchError) as excinfo:
            query(root, HasRole("slider"))
        assert "no element matched" in str(excinfo.value)
        assert excinfo.value.matcher == HasRole("slider")

    def test_ambiguous(self):
        root = mount()
        with pytest.raises(AmbiguousMatchError) as excinfo:
            root.query(HasRole("button"))
        err = excinfo.value
        assert err.count == 3
        assert [e.id for e in err.matches] == ["b1", "b2", "b3"]
        assert str(err).startswith("ambiguous: 3 elements matched")

    def test_errors_share_a_base(self):
        assert issubclass(NoMatchError, QueryError)
        assert issubclass(AmbiguousMatchError, QueryError)
        assert issubclass(QueryError, LookupError)

    def test_message_names_the_matcher(self):
        root = mount()
        with pytest.raises(NoMatchError, match="HasRole\\(role='slider'\\)"):
            root.query(HasRole("slider"))
