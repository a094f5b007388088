"""
Analytics metrics for repository signals.

Each module computes one family of metrics as pure functions of
``RawSignals`` and, where time matters, an explicit ``now``.
"""
