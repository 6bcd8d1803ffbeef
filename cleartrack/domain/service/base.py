"""Base service class for domain services."""


class Service:
    """Marker base for domain services.

    Services own the rules that need a repository: state transitions guarded
    by conditional updates, lookups that lazily expire invites, and pool
    selection.
    """
