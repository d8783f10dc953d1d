"""Dashboard API server for daily keywords, music charts, news and realtime search trends."""

__version__ = "0.1.0"