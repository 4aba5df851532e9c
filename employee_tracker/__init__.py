"""Employee tracker: departments, roles and employees from the terminal."""

__version__ = "0.1.0"
