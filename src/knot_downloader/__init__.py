"""Poll remote files over HTTP and mirror them to local paths."""

__version__ = "0.1.0"
