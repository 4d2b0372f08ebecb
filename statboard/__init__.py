"""Dashboard for host resource usage and HTTP endpoint health."""

__version__ = "0.1.0"
