"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

Component = Literal["notification", "persistence"]


class ProviderBase(Provider):
    """Base for all DI providers.

    A provider class with subclasses is a mockable component: one subclass
    is the production implementation, another (``__is_mock__ = True``) the
    test double. A provider without subclasses is used as is.

    Attributes:
        __mock_component__: Component name (None for concrete providers)
        __is_mock__: Whether this is a mock implementation
        __depends_on__: Components that must also be unmocked with this one
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
    __depends_on__: ClassVar[frozenset[Component]] = frozenset()

    @classmethod
    def is_mockable(cls) -> bool:
        return bool(cls.__subclasses__())

    @classmethod
    def implementation(cls, use_mock: bool) -> type["ProviderBase"]:
        """Pick the production or mock subclass of a mockable component.

        Raises:
            ValueError: If no subclass with the requested flag is loaded
        """
        if not cls.is_mockable():
            return cls

        for subclass in cls.__subclasses__():
            if subclass.__is_mock__ == use_mock:
                return subclass

        kind = "mock" if use_mock else "production"
        raise ValueError(f"No {kind} implementation for {cls.__mock_component__}")
