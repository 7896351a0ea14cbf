"""usercred: user credential management and authentication service."""

__version__ = "0.1.0"
