"""
Service and CLI tests.

  streams.py            — JSONL fixtures
  test_jsonl_parser.py  — buffering, flush, noise, chunk determinism
  test_session.py       — StreamSession end to end
  test_cli.py           — tree / grade / jsx subcommands
  test_config.py        — env parsing and settings overrides
"""
