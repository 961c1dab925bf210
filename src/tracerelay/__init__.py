"""tracerelay — listener-broadcast trace facade.

Forwards write / write-line / indent / flush calls to an ordered set of
listeners, with severity gates, auto-flush and optional mirroring into
the stdlib logging module.
"""

from tracerelay._version import __version__, __app_name__

__all__ = ["__version__", "__app_name__"]
