"""Configuration for rigdoctor."""

from .settings import DoctorSettings, SettingsManager, load_settings

__all__ = ["DoctorSettings", "SettingsManager", "load_settings"]
