"""Shared test fixtures."""

import pytest

from macro_hunt.config import Settings
from macro_hunt.containers import AppContainer
from macro_hunt.services.credentials import CredentialsService
from macro_hunt.services.meals import MealSyncService
from macro_hunt.services.stats import StatsService
from macro_hunt.services.vision import VisionService
from tests.fakes import (
    FakeVisionClient,
    InMemoryCredentialsRepository,
    InMemoryMealRepository,
    RecordingClientFactory,
    valid_credentials,
)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
    )


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def credentials_repository() -> InMemoryCredentialsRepository:
    return InMemoryCredentialsRepository()


@pytest.fixture
def credentials_service(
    credentials_repository: InMemoryCredentialsRepository,
) -> CredentialsService:
    return CredentialsService(
        repository=credentials_repository, defaults=valid_credentials()
    )


@pytest.fixture
def client_factory() -> RecordingClientFactory:
    return RecordingClientFactory()


@pytest.fixture
def vision_client() -> FakeVisionClient:
    return FakeVisionClient()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    meal_repository: InMemoryMealRepository,
    credentials_service: CredentialsService,
    client_factory: RecordingClientFactory,
    vision_client: FakeVisionClient,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        credentials_service=credentials_service,
        vision_service=VisionService(
            client_factory=lambda _key: vision_client,
            api_key_provider=lambda: credentials_service.current.gemini_key,
        ),
        meal_sync_service=MealSyncService(
            repository=meal_repository,
            credentials_provider=lambda: credentials_service.current,
            client_factory=client_factory,
        ),
        stats_service=StatsService(repository=meal_repository),
        close_resources=close_resources,
    )
