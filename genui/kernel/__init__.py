"""
genui Kernel — the pure engine.

Components:
  patches     — (tree, op) → tree  (pure, never raises, never mutates)
  normalizer  — eight layout passes, tree → tree
  actions     — action name → handler → typed result
  values      — runtime value store for user input
  url_policy  — navigation URL allow-list
  graders     — structural and composition quality checks
  jsx         — tree → JSX module source

Supporting: catalog, validator, controls, text.
"""

from genui.kernel.actions import (
    BUILTIN_HANDLERS,
    create_action_handler,
    create_click_handler,
    create_handler_map,
    create_submit_handler,
    dispatch_action,
    process_action_result,
)
from genui.kernel.graders import grade_composition, grade_tree, walk_tree
from genui.kernel.jsx import tree_to_jsx
from genui.kernel.normalizer import PIPELINE, normalize_props_children_to_structural, normalize_tree
from genui.kernel.patches import apply_patch, apply_patches, parse_patch_line
from genui.kernel.types import (
    ActionEvent,
    ActionResultCallbacks,
    ExternalResult,
    MessageResult,
    NoneResult,
    PatchResult,
    empty_tree,
)
from genui.kernel.url_policy import sanitize_url
from genui.kernel.values import RuntimeValueStore

__all__ = [
    "apply_patch",
    "apply_patches",
    "parse_patch_line",
    "normalize_tree",
    "normalize_props_children_to_structural",
    "PIPELINE",
    "BUILTIN_HANDLERS",
    "create_handler_map",
    "dispatch_action",
    "process_action_result",
    "create_action_handler",
    "create_click_handler",
    "create_submit_handler",
    "RuntimeValueStore",
    "sanitize_url",
    "grade_tree",
    "grade_composition",
    "walk_tree",
    "tree_to_jsx",
    "empty_tree",
    "ActionEvent",
    "ActionResultCallbacks",
    "PatchResult",
    "MessageResult",
    "ExternalResult",
    "NoneResult",
]
