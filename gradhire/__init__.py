"""Client layer for the GradHire resume and job-matching backend."""

__version__ = "0.1.0"
