"""
Tree normalizer tests.

  test_passes.py    — each of the eight passes in isolation
  test_pipeline.py  — order, idempotence, no orphans, props.children repair
"""
