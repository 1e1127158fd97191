"""featgen -- interactive scaffolding for front-end feature modules."""

__version__ = "0.1.0"
