"""Version information for the Magpie SDK."""

__version__ = "0.1.0"
