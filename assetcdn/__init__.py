"""Origin server for edge-cached asset delivery."""

__version__ = "0.1.0"
