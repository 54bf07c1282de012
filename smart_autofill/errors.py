# errors.py - exceptions raised by the layers around the engine.
# The engine itself never raises on bad input, it degrades to fewer guesses.


class AutofillError(Exception):
    """Base class for smart_autofill errors."""


class ResourceLoadError(AutofillError):
    """A vocabulary or corpus file could not be read in full."""

    def __init__(self, path, reason):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"cannot load {self.path}: {reason}")


class ModelStoreError(AutofillError):
    """A saved model could not be written or read back."""
