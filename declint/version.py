# Package version, shown in reporter headers.

__version__ = "0.1.0"
