"""JSONL fixtures shared by service and CLI tests."""

import json

CARD_OPS = [
    {"op": "add", "path": "/root", "value": "card"},
    {
        "op": "add",
        "path": "/elements/card",
        "value": {"key": "card", "type": "Surface", "props": {}, "children": ["stack"]},
    },
    {
        "op": "add",
        "path": "/elements/stack",
        "value": {
            "key": "stack",
            "type": "Stack",
            "props": {"gap": "lg"},
            "children": ["title", "count-display"],
            "parentKey": "card",
        },
    },
    {
        "op": "add",
        "path": "/elements/title",
        "value": {
            "key": "title",
            "type": "Text",
            "props": {"children": "Counter", "variant": "heading2"},
            "parentKey": "stack",
        },
    },
    {
        "op": "add",
        "path": "/elements/count-display",
        "value": {
            "key": "count-display",
            "type": "Text",
            "props": {"children": "0", "variant": "heading1"},
            "parentKey": "stack",
        },
    },
]

CARD_JSONL = "\n".join(json.dumps(op) for op in CARD_OPS) + "\n"
