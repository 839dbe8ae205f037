"""Implementation modules of plangeo. Import public names from ``plangeo``."""
