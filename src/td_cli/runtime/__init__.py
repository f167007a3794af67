"""Runtime environment discovery for td."""

from .home import ConfigurationError, get_td_home

__all__ = ["ConfigurationError", "get_td_home"]
