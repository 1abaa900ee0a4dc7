"""Shared pytest fixtures and configuration for the bl-console test suite.

Guidelines
----------
* No test needs Windows, pywin32 or a running game.
* The pipe is faked at the connector seam or through ``sys.modules``.
* Core tests must be pure — no side effects.
"""

from __future__ import annotations
