"""reviewbot - automated pull request assistant."""

__version__ = "0.1.0"
