"""Version information for TLI Tracker."""

__version__ = "0.3.0"
