"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from cleartrack.util.di import select_providers


def create_container() -> AsyncContainer:
    """Build the production container with every component real."""
    return make_async_container(*select_providers(), FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the app; routes resolve through DishkaRoute."""
    setup_dishka(container, app)
