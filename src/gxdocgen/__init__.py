"""GXDocGen - Documentation generator for GeneXus export packages."""

try:
    from importlib.metadata import version

    __version__ = version("gxdocgen")
except Exception:
    __version__ = "0.0.0.dev0+local"  # Fallback for development
