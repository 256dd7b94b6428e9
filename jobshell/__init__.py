"""An interactive UNIX shell with job control: command parsing, job list and signal handling."""

__version__ = "0.1.0"
__all__ = ["jobs", "parsing", "shell", "signals"]