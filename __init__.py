"""Personal finance metrics engine.

Pure functions that turn a snapshot of transactions and the two profile
documents into dashboard metrics and chart series.  See ``metrics.py`` and
``transforms.py`` for entry points.
"""
