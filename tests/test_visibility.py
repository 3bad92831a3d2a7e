# File: tests/test_visibility.py
import pytest

from link_scout.crawler.models import ContentNode, NodeTypes
from link_scout.crawler.visibility import find_closest_document, is_visible
from link_scout.errors import MissingDocumentError, TreeCycleError


class LoopingContext:
    """Context whose parent lookup never terminates."""

    def get_parent(self, node):
        return node

    def is_root(self, node):
        return False


def test_root_is_visible(tree, context):
    assert is_visible(tree["root"], context)


@pytest.mark.parametrize("name", ["sites", "site", "text1", "about"])
def test_connected_nodes_are_visible(tree, context, name):
    assert is_visible(tree[name], context)


def test_orphan_is_invisible(tree, context):
    assert not is_visible(tree["lost"], context)


def test_detached_subtree_is_invisible(tree, context):
    tree["main"].detach()
    assert not is_visible(tree["text1"], context)
    assert not is_visible(tree["main"], context)


def test_node_below_hidden_ancestor(tree, store, now):
    default = store.create_context("live", current_datetime=now)
    permissive = store.create_context("live", show_hidden=True, current_datetime=now)
    assert not is_visible(tree["below"], default)
    assert is_visible(tree["below"], permissive)


def test_cycle_guard():
    node = ContentNode("a", "document", "a")
    with pytest.raises(TreeCycleError):
        is_visible(node, LoopingContext(), max_depth=5)


def test_closest_document_cycle_guard():
    a = ContentNode("a", "unstructured", "a")
    b = a.add_child(ContentNode("b", "content", "b"))
    b.add_child(a)
    with pytest.raises(TreeCycleError) as err:
        find_closest_document(b, NodeTypes(), ["document"], max_depth=5)
    assert err.value.identifier == "b"


def test_closest_document_of_content(tree):
    assert find_closest_document(tree["text1"], NodeTypes(), ["document"]) is tree["site"]


def test_closest_document_of_document_is_itself(tree):
    assert find_closest_document(tree["about"], NodeTypes(), ["document"]) is tree["about"]


def test_closest_document_uses_supertypes():
    page = ContentNode("p", "page", "p")
    text = page.add_child(ContentNode("t", "text", "t"))
    types = NodeTypes({"page": ["document"]})
    assert find_closest_document(text, types, ["document"]) is page


def test_missing_document_ancestor_fails_loudly():
    root = ContentNode("root", "root")
    folder = root.add_child(ContentNode("f", "unstructured", "f"))
    fragment = folder.add_child(ContentNode("c", "content", "c"))
    with pytest.raises(MissingDocumentError) as err:
        find_closest_document(fragment, NodeTypes(), ["document"])
    assert err.value.identifier == "c"
    assert err.value.path == "/f/c"
