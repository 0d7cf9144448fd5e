"""Build release catalogs and packages for installable skills."""

__version__ = "0.1.0"
