"""Serial line settings, tool configuration, read buffering, error texts and layout geometry."""

__version__ = "0.1.0"