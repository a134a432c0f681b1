"""Read and verify INI software licenses and build hardware identifiers."""

__version__ = "0.1.0"