"""strkit test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.

General guidance
- Keep unit tests fast and deterministic; pin the local timezone with the
  `local_tz` fixture instead of relying on the machine's zone.
- Property-based tests live with the module they exercise and use @pytest.mark.property.
- Tests that start threads use @pytest.mark.concurrency.
"""
