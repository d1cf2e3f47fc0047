"""Audio resampling, down-mixing and chroma vector filtering stages for audio fingerprinting."""

__version__ = "1.5.1"