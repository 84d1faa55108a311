"""Command line interface for rigdoctor."""
