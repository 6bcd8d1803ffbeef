"""Base use case."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

RequestT = TypeVar("RequestT", bound=BaseModel)
ResponseT = TypeVar("ResponseT", bound=BaseModel)


class BaseUseCase(ABC, Generic[RequestT, ResponseT]):
    """One operation exposed to the API, orchestrating domain services.

    Use cases run inside one request scope, so every repository write they
    make shares the request's transaction.
    """

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        pass
