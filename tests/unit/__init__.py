"""Unit tests.

Purpose
- Verify a single module/class/function in isolation.

Guidelines
- No real I/O; time-dependent code takes an injected clock.
- Snapshot formatter views (``str(view)``) before formatting again.
- Keep tests small, fast, and deterministic.
"""
