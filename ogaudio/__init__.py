"""Find the audio a webpage declares through Open Graph metadata."""

__version__ = "1.0.0"
