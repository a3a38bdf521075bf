"""
End-to-end scenarios: mount markup, query it the way a user would, interact.

Each test mounts its own fixture and unmounts it afterwards, since fixtures
sharing one document are visible to each other's queries.
"""

from __future__ import annotations

import pytest

from frontlens import (
    AmbiguousMatchError,
    Document,
    HasLabel,
    HasPlaceholder,
    HasRole,
    HasText,
    NoMatchError,
    Not,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def document():
    return Document()


def mount_counter(document: Document):
    """A tiny counter widget: a value paragraph and an Add button."""
    root = document.mount("<p>Value: 0</p><button>Add</button>")
    value = root.children[0]
    state = {"count": 0}

    def on_click(event):
        state["count"] += 1
        value.set_inner_html(f"Value: {state['count']}")

    root.children[1].add_event_listener("click", on_click)
    return root, state


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------

class TestScenarios:
    def test_pick_button_by_excluding_label(self, document):
        root = document.mount(
            """<div>
                <label>
                    I will start testing my frontend!
                    <button>
                        Take the red pill
                    </button>
                </label>
                <label>
                    It's too problematic dude...
                    <button>
                        Take the blue pill
                    </button>
                </label>
            </div>"""
        )
        go_to_matrix = root.get(HasRole("button").and_(Not(HasLabel("It's too problematic dude..."))))
        assert go_to_matrix is not None
        assert go_to_matrix.inner_text == "Take the red pill"
        assert root.query(HasLabel("I will start testing my frontend!")) is go_to_matrix
        document.unmount(root)

    def test_checkbox_and_plain_input_roles(self, document):
        root = document.mount('<input type="checkbox" id="c"><input id="t">')
        assert root.query(HasRole("checkbox")).id == "c"
        assert root.query(HasRole("textbox")).id == "t"
        document.unmount(root)

    def test_aria_label_beats_wrapping_label(self, document):
        root = document.mount('<label>Different text <input aria-label="Foo"></label>')
        field = root.query(HasRole("textbox"))
        assert root.query(HasLabel("Foo")) is field
        assert root.get(HasLabel("Different text")) is None
        document.unmount(root)

    def test_click_updates_counter(self, document):
        root, state = mount_counter(document)
        value = root.get(HasText("Value:"))
        button = root.get(HasRole("button"))

        assert value.inner_text == "Value: 0"
        button.click()
        assert state["count"] == 1
        assert value.inner_text == "Value: 1"
        assert root.query(HasText("Value: 1")) is value
        document.unmount(root)

    def test_query_priority_ladder(self, document):
        root = document.mount(
            """<form>
                <label for="email">Email</label>
                <input id="email" type="email" placeholder="you@example.com">
                <button type="submit">Sign up</button>
            </form>"""
        )
        by_role = root.query(HasRole("textbox"))
        by_label = root.query(HasLabel("Email"))
        by_placeholder = root.query(HasPlaceholder("you@example.com"))
        assert by_role is by_label is by_placeholder
        assert root.query(HasRole("button") & HasText("Sign up")).get_attribute("type") == "submit"
        document.unmount(root)

    def test_strict_query_fails_loudly(self, document):
        root = document.mount("<button>Save</button><button>Save as</button>")
        with pytest.raises(AmbiguousMatchError):
            root.query(HasRole("button"))
        with pytest.raises(NoMatchError):
            root.query(HasRole("checkbox"))
        assert root.query(HasRole("button") & Not(HasText("as"))).inner_text == "Save"
        document.unmount(root)

    def test_fixtures_in_one_document_collide_until_unmounted(self, document):
        first = document.mount("<button id='one'>Go</button>")
        second = document.mount("<button id='two'>Go</button>")
        body = document.body
        with pytest.raises(AmbiguousMatchError):
            body.query(HasRole("button"))
        document.unmount(first)
        assert body.query(HasRole("button")).id == "two"
        document.unmount(second)
