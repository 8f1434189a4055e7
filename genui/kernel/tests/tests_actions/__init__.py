"""
Action dispatcher tests.

  test_builtin_handlers.py       — increment, decrement, submit_form, navigate
  test_dispatch.py               — handler maps, dispatch, store context
  test_process_action_result.py  — result → host callbacks, handler factories
"""
