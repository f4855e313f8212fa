"""
Runtime support for the keyring: error model and wire encodings.
"""

from .errors import *
from .codec import *
