"""ticketboard - Board state-transition and filtering engine for a ticket tracker."""

__version__ = "0.1.0"


def get_version() -> str:
    """Return the package version."""
    return __version__
