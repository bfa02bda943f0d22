"""Version information for logtree. Keep in sync with setup.py."""

__version__ = "0.1.0"
__app_name__ = "logtree"
