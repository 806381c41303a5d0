"""Core indicator and signal logic.

This package contains pure business logic with no I/O dependencies
(no network, storage, or rendering). Given a candle history for one
instrument it computes an indicator snapshot and classifies it into a
directional signal.
"""
