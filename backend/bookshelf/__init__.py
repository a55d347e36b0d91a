"""Book collection API with username/password login and bearer tokens."""

__version__ = "1.0.0"
