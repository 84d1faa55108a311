"""rigdoctor - health checks for rig working copies"""

__version__ = "0.1.0"
