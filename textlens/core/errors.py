class TextLensError(Exception):
    """Base class for pipeline and store failures."""


class ValidationError(TextLensError):
    """
    Input rejected before any side effect (blank text, bad parameters).
    """


class CapabilityError(TextLensError):
    """
    The language-understanding call failed or returned unparseable output.
    """


class StoreError(TextLensError):
    """Persistence or query failure."""
