"""op-export — pick what goes into a 1Password JSON export from the terminal."""

__version__ = "0.1.0"
