"""appendsw: bundle custom code and merge it into a service worker."""

__version__ = "0.1.0"
