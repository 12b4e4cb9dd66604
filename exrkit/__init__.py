"""Little-endian binary I/O and encoders for OpenEXR header values."""

__version__ = "0.1.0"