"""
Patch engine tests.

  test_parse_patch_line.py — line → op validation
  test_apply_patch.py      — add / replace / remove semantics, guards, no-ops
  test_immutability.py     — input trees are never mutated
"""
