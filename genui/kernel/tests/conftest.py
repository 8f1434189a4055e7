"""
Kernel test configuration.

Shared fixtures; plain builders live in helpers.py.
"""

from __future__ import annotations

import pytest

from genui.kernel.tests.helpers import el, tree_of


@pytest.fixture
def card_tree():
    """Surface > Stack > [title, count-display]."""
    return tree_of(
        "card",
        el("card", "Surface", {}, ["stack"]),
        el("stack", "Stack", {"gap": "lg"}, ["title", "count-display"], parentKey="card"),
        el("title", "Text", {"children": "Counter", "variant": "heading2"}, parentKey="stack"),
        el("count-display", "Text", {"children": "0", "variant": "heading1"}, parentKey="stack"),
    )
