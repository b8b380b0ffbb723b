"""Premium range estimator.

Estimates the worst/best case outcome of subscribing to a fund at NAV while it
trades at a premium, under T+N settlement and daily price limits.
"""

__version__ = "0.1.0"
