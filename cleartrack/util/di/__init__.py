"""Dependency injection module.

Containers are assembled from ``PROVIDERS``. Infrastructure components
(notification channels, persistence) can be swapped for mocks by name;
everything else is always the production provider.
"""

from cleartrack.util.di.application import ProdApplicationProvider
from cleartrack.util.di.base import Component, ProviderBase
from cleartrack.util.di.core import ProdConfigProvider
from cleartrack.util.di.domain import ProdDomainProvider
from cleartrack.util.di.infrastructure import (
    NotificationProvider,
    PersistenceProvider,
    ProdNotificationProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Mockable components
    NotificationProvider,
    PersistenceProvider,
]


def get_provider(
    base: type[ProviderBase], use_mock: bool = False
) -> type[ProviderBase]:
    """Provider class to instantiate for ``base``."""
    return base.implementation(use_mock)


def mockable_components() -> dict[Component, type[ProviderBase]]:
    """Mockable component bases in ``PROVIDERS``, by component name."""
    return {
        base.__mock_component__: base
        for base in PROVIDERS
        if base.is_mockable() and base.__mock_component__ is not None
    }


def select_providers(mocked: set[Component] | None = None) -> list[ProviderBase]:
    """Instantiate one provider per entry in ``PROVIDERS``.

    Args:
        mocked: Components to take the mock implementation for. The mock
            subclasses must have been imported beforehand.

    Returns:
        Provider instances ready for ``make_async_container``
    """
    mocked = mocked or set()
    return [
        get_provider(base, use_mock=base.__mock_component__ in mocked)()
        for base in PROVIDERS
    ]


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "mockable_components",
    "select_providers",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "NotificationProvider",
    "PersistenceProvider",
    "ProdNotificationProvider",
    "ProdPersistenceProvider",
]
