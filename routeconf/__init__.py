"""Apply an interface address, a route and DNS servers from a TOML file."""

__version__ = "0.1.0"