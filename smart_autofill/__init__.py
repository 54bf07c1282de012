"""
smart_autofill

Letter-by-letter word autofill: three ranked guesses per keystroke, learned
from a vocabulary, old messages and live accept/reject feedback.
"""

from .core.autofill import SmartWord
from .utils.config_manager import AutofillConfig

__all__ = ["SmartWord", "AutofillConfig"]

__version__ = "0.1.0"
