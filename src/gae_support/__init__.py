"""gae-support

Adapter layer that lets a Python web application kernel run unmodified on
Google App Engine: hosting detection, platform-appropriate logging sinks,
bucket-backed storage paths and debug dumpers that write through the
framework output channel.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
