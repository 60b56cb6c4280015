"""Home-services marketplace core: SQL query builders, a shared MySQL connection and HTTP controllers."""

__version__ = "0.1.0"