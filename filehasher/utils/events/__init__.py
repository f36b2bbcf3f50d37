"""Module: __init__.py.

Author: Michael Economou
Date: 2025-02-03

Event system.

Pure Python event/signal implementation for decoupling observers from state changes.
Used by the hashing core so it stays free of any Qt dependency.
"""

from filehasher.utils.events.observable import Observable, Signal, SignalInstance

__all__ = ["Observable", "Signal", "SignalInstance"]
