"""ReThread: upcycle a garment photo into a redesigned piece."""

__version__ = "1.0.0"
