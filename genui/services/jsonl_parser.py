"""
JSONL stream parser for model output.

Buffers streaming text until newlines and turns each complete line into a
patch op. Malformed or unsupported lines are skipped; nothing raises.
"""

from __future__ import annotations

import logging

from genui.kernel.patches import parse_patch_line

logger = logging.getLogger(__name__)

_FENCE = "```"


class JSONLParser:
    """
    Parses streaming JSONL patch ops.

    Accumulates partial chunks in a buffer and emits ops for complete lines
    as they become available. Any split of the same stream into chunks
    yields the same ops.
    """

    def __init__(self) -> None:
        self.buffer = ""

    def push(self, chunk: str) -> list[dict]:
        """
        Push a text chunk (may be partial), return ops from complete lines.

        Args:
            chunk: Raw text from the model stream

        Returns:
            Patch op dicts, in stream order
        """
        self.buffer += chunk
        ops: list[dict] = []
        while "\n" in self.buffer:
            line, self.buffer = self.buffer.split("\n", 1)
            op = self._parse(line)
            if op is not None:
                ops.append(op)
        return ops

    feed = push

    def flush(self) -> list[dict]:
        """
        Parse whatever is left in the buffer as a final line.

        Call this after the stream ends to handle output with no trailing
        newline.

        Returns:
            0 or 1 patch ops
        """
        line, self.buffer = self.buffer, ""
        op = self._parse(line)
        return [] if op is None else [op]

    def reset(self) -> None:
        self.buffer = ""

    @staticmethod
    def _parse(line: str) -> dict | None:
        stripped = line.strip()
        if not stripped or stripped.startswith(_FENCE):
            return None
        op = parse_patch_line(stripped)
        if op is None:
            logger.debug("JSONLParser: skipping line: %r", stripped[:200])
        return op
