"""
Kernel tests.

  helpers.py          — element and tree builders
  tests_patches/      — patch engine
  tests_normalizer/   — the eight normalizer passes and pipeline
  tests_actions/      — handlers, dispatch, result processing
  tests_graders/      — structural and composition graders
  test_values.py      — runtime value store
  test_url_policy.py  — URL sanitizer
  test_text.py        — leading emoji stripping
  test_validator.py   — enum coercion, prop validation, repair
  test_jsx.py         — tree → JSX export
  test_controls.py    — stateful control models
"""
