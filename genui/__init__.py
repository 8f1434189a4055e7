"""
genui — streaming generative-UI kernel.

The kernel package is pure (no IO); services wrap it for streaming sessions.
"""

__version__ = "0.1.0"
