"""
genui services — stateful wrappers around the pure kernel.

  jsonl_parser  incremental line buffer → patch ops
  session       StreamSession: parser + tree + value store + actions
"""
