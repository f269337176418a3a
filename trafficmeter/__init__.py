"""Network traffic and CPU usage monitoring helpers with a daily traffic history store."""

__version__ = "0.1.0"