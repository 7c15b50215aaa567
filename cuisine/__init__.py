"""A JSON web service and SQLite storage for a French culinary glossary and recipes."""

__version__ = "0.1.0"