class SubsetSelectionError(Exception):
    """Base class for errors raised by the subset selection framework."""


class IncompatibleSearchListenerError(SubsetSelectionError):
    """Raised when a search listener is used with a kind of search it does not support."""
