"""
mcmod - sync a mod project into its Forge workspace and launch it.
"""

__version__ = "0.1.0"
