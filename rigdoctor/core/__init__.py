"""Core components for rigdoctor."""
