"""clinic-scribe -- capture a clinical conversation and summarize it."""

__version__ = '0.3.0'
