"""
KUALITAS shared layer: models, validators, parsers, configuration
"""

__version__ = "2.0.0"
