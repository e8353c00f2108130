"""camrelay: relay newly written camera media to a webhook."""

__version__ = "0.1.0"
