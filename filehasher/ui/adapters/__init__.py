"""Qt adapters for the hashing core.

Imported explicitly (not re-exported here) so the core and CLI never load PyQt5:
    from filehasher.ui.adapters.qt_progress_poller import QtProgressPoller
"""
