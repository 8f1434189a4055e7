"""
Grader tests.

  test_structural.py   — the eight structural rules and walk_tree
  test_composition.py  — hierarchy, responsive layout, surface nesting
"""
