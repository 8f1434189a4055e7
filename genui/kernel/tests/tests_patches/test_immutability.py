"""
Patch engine -- immutability

Every op, applied or degraded, leaves the input tree deep-equal to its
prior state, and untouched subtrees are shared rather than copied.
"""

import copy

import pytest

from genui.kernel.patches import apply_patch, apply_patches
from genui.kernel.tests.helpers import el

OPS = [
    {"op": "add", "path": "/root", "value": "other"},
    {"op": "add", "path": "/elements/new", "value": el("new", "Text")},
    {"op": "add", "path": "/elements/card/children/-", "value": "new"},
    {"op": "add", "path": "/elements/card/children/0", "value": "new"},
    {"op": "replace", "path": "/elements/title/props/children", "value": "changed"},
    {"op": "replace", "path": "/elements/card/children/0", "value": "x"},
    {"op": "remove", "path": "/elements/title"},
    {"op": "remove", "path": "/elements/title/props/children"},
    {"op": "remove", "path": "/elements/card/children/0"},
    {"op": "remove", "path": "/root"},
    {"op": "remove", "path": "/elements/missing/props/x"},
    {"op": "add", "path": "/elements/__proto__/x", "value": 1},
    {"op": "add", "path": "", "value": {}},
]


def make_tree():
    return {
        "root": "card",
        "elements": {
            "card": el("card", "Surface", {"meta": {"a": [1, 2]}}, ["title"]),
            "title": el("title", "Text", {"children": "Hi"}, parentKey="card"),
        },
    }


class TestInputNeverMutated:
    @pytest.mark.parametrize("op", OPS, ids=lambda o: f"{o['op']} {o['path']}")
    def test_single_op(self, op):
        tree = make_tree()
        snapshot = copy.deepcopy(tree)
        apply_patch(tree, op)
        assert tree == snapshot

    def test_whole_sequence(self):
        tree = make_tree()
        snapshot = copy.deepcopy(tree)
        apply_patches(tree, OPS)
        assert tree == snapshot


class TestStructuralSharing:
    def test_untouched_elements_are_shared(self):
        tree = make_tree()
        result = apply_patch(tree, {"op": "replace", "path": "/elements/title/props/children", "value": "Yo"})
        assert result["elements"]["card"] is tree["elements"]["card"]
        assert result["elements"]["title"] is not tree["elements"]["title"]

    def test_nested_prop_containers_copied_along_path(self):
        tree = make_tree()
        result = apply_patch(tree, {"op": "add", "path": "/elements/card/props/meta/a/-", "value": 3})
        assert result["elements"]["card"]["props"]["meta"]["a"] == [1, 2, 3]
        assert tree["elements"]["card"]["props"]["meta"]["a"] == [1, 2]
