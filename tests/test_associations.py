# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Generated association mutators: pure, copy-on-write value transforms.
"""

from __future__ import annotations

import pytest

from nodealchemy import InvalidNodeReferenceError, SchemaBuilder


@pytest.fixture
def graph(biblio):
    """A few unsaved-but-identified nodes of the bibliography schemas."""
    author, publisher, book = biblio["Author"], biblio["Publisher"], biblio["Book"]
    return {
        "Author": author,
        "Publisher": publisher,
        "Book": book,
        "herbert": author(id=1, name="Frank Herbert"),
        "ace": publisher(id=10, name="Ace"),
        "chilton": publisher(id=11, name="Chilton"),
        "gollancz": publisher(id=12, name="Gollancz"),
        "dune": book(id=100, title="Dune"),
    }


class TestSingleAssociation:

    def test_set(self, graph):
        Book, dune = graph["Book"], graph["dune"]
        updated = Book.set_authored_by(dune, graph["herbert"])
        assert updated.authored_by == 1
        # Input value untouched
        assert dune.authored_by is None
        assert updated.title == "Dune"
        assert updated.id == 100

    def test_set_replaces(self, graph):
        Book, Author = graph["Book"], graph["Author"]
        other = Author(id=2, name="Brian Herbert")
        value = Book.set_authored_by(graph["dune"], graph["herbert"])
        assert Book.set_authored_by(value, other).authored_by == 2

    def test_clear(self, graph):
        Book = graph["Book"]
        value = Book.set_authored_by(graph["dune"], graph["herbert"])
        cleared = Book.clear_authored_by(value)
        assert cleared.authored_by is None
        assert value.authored_by == 1

    def test_set_unsaved_target_stores_none(self, graph):
        Book, Author = graph["Book"], graph["Author"]
        assert Book.set_authored_by(graph["dune"], Author(name="Anonymous")).authored_by is None

    @pytest.mark.parametrize("target", [1, "Frank Herbert", None, {"id": 1}])
    def test_set_rejects_non_node_target(self, graph, target):
        with pytest.raises(InvalidNodeReferenceError):
            graph["Book"].set_authored_by(graph["dune"], target)

    def test_set_rejects_value_of_other_type(self, graph):
        with pytest.raises(InvalidNodeReferenceError):
            graph["Book"].set_authored_by(graph["herbert"], graph["herbert"])

    def test_invalid_reference_is_type_error(self, graph):
        with pytest.raises(TypeError):
            graph["Book"].set_authored_by(graph["dune"], 42)

    def test_single_association_has_no_add_or_delete(self, graph):
        Book = graph["Book"]
        assert Book.operation("add_authored_by") is None
        with pytest.raises(AttributeError):
            Book.delete_authored_by


class TestMultipleAssociation:

    def test_add_to_empty(self, graph):
        Book = graph["Book"]
        value = Book.add_published_by(graph["dune"], [graph["ace"], graph["chilton"]])
        # Expected: supplied order is kept
        assert value.published_by == (10, 11)

    def test_add_prepends(self, graph):
        Book = graph["Book"]
        value = Book.add_published_by(graph["dune"], [graph["ace"], graph["chilton"]])
        value = Book.add_published_by(value, graph["gollancz"])
        # Expected: (12, 10, 11)
        # Derivation: new identifiers come ahead of the existing ones
        assert value.published_by == (12, 10, 11)

    def test_add_keeps_duplicates(self, graph):
        Book = graph["Book"]
        value = Book.add_published_by(graph["dune"], graph["ace"])
        value = Book.add_published_by(value, graph["ace"])
        assert value.published_by == (10, 10)

    def test_add_empty_list_is_noop(self, graph):
        Book = graph["Book"]
        value = Book.add_published_by(graph["dune"], [graph["ace"]])
        assert Book.add_published_by(value, []).published_by == (10,)

    def test_add_then_delete_round_trips(self, graph):
        Book = graph["Book"]
        original = Book.add_published_by(graph["dune"], [graph["ace"], graph["chilton"]])
        targets = [graph["gollancz"], graph["ace"]]
        restored = Book.delete_published_by(Book.add_published_by(original, targets), targets)
        assert restored.published_by == original.published_by
        assert restored == original

    def test_delete_removes_first_occurrence_per_target(self, graph):
        Book = graph["Book"]
        value = Book.set_published_by(graph["dune"], [graph["ace"], graph["chilton"], graph["ace"]])
        value = Book.delete_published_by(value, graph["ace"])
        assert value.published_by == (11, 10)

    def test_delete_absent_target_is_noop(self, graph):
        Book = graph["Book"]
        value = Book.add_published_by(graph["dune"], graph["ace"])
        assert Book.delete_published_by(value, graph["gollancz"]).published_by == (10,)

    def test_set_replaces_in_order(self, graph):
        Book = graph["Book"]
        value = Book.add_published_by(graph["dune"], graph["ace"])
        value = Book.set_published_by(value, [graph["gollancz"], graph["chilton"]])
        assert value.published_by == (12, 11)

    def test_set_accepts_single_target(self, graph):
        Book = graph["Book"]
        assert Book.set_published_by(graph["dune"], graph["chilton"]).published_by == (11,)

    def test_set_accepts_tuple(self, graph):
        Book = graph["Book"]
        value = Book.set_published_by(graph["dune"], (graph["ace"], graph["chilton"]))
        assert value.published_by == (10, 11)

    def test_clear(self, graph):
        Book = graph["Book"]
        value = Book.add_published_by(graph["dune"], [graph["ace"], graph["chilton"]])
        assert Book.clear_published_by(value).published_by == ()
        assert value.published_by == (10, 11)

    def test_mutators_never_touch_input(self, graph):
        Book, dune = graph["Book"], graph["dune"]
        Book.add_published_by(dune, graph["ace"])
        Book.set_published_by(dune, graph["ace"])
        Book.clear_published_by(dune)
        Book.delete_published_by(dune, graph["ace"])
        assert dune.published_by == ()

    def test_non_node_target_in_list(self, graph):
        Book = graph["Book"]
        with pytest.raises(InvalidNodeReferenceError):
            Book.add_published_by(graph["dune"], [graph["ace"], 11])
        with pytest.raises(InvalidNodeReferenceError):
            Book.delete_published_by(graph["dune"], ["Ace"])
        with pytest.raises(InvalidNodeReferenceError):
            Book.set_published_by(graph["dune"], [None])

    def test_target_type_is_not_checked(self, graph):
        # Any node value is accepted as target; its id is stored
        Book = graph["Book"]
        assert Book.add_published_by(graph["dune"], graph["herbert"]).published_by == (1,)

    def test_value_of_wrong_type(self, graph):
        with pytest.raises(InvalidNodeReferenceError):
            graph["Book"].add_published_by(graph["ace"], graph["chilton"])


class TestSelfAssociation:

    def test_node_type_referring_to_itself(self):
        Person = (
            SchemaBuilder("Person")
            .property("name")
            .has_edges("friends", "Person", reflect="friends")
            .has_edge("mentor", "Person")
            .build()
        )
        ada = Person(id=1, name="Ada")
        bob = Person(id=2, name="Bob")
        ada = Person.add_friends(ada, bob)
        ada = Person.set_mentor(ada, bob)
        assert ada.friends == (2,)
        assert ada.mentor == 2
        assert Person.reflect_of("friends") == "friends"
