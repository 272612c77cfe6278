"""Core setup-engine logic: indicators, setup detectors, and models.

This package contains pure computation with no I/O dependencies
(no database, network, or file access). Candles come in already
materialized; detected signals go out as plain records for an external
store to persist.
"""
