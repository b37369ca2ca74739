"""repovol - isolated repository workspaces on copy-on-write volumes."""

__version__ = "0.1.0"
