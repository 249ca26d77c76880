"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from macro_hunt.adapters.craft_document_client import CraftDocumentClient
from macro_hunt.adapters.gemini_vision_client import GeminiVisionClient
from macro_hunt.adapters.http_transport import HttpxTransport
from macro_hunt.adapters.retrying_executor import RetryingExecutor
from macro_hunt.adapters.supabase_credentials_repository import (
    SupabaseCredentialsRepository,
)
from macro_hunt.adapters.supabase_meal_repository import SupabaseMealRepository
from macro_hunt.config import Settings
from macro_hunt.domain.credentials import Credentials
from macro_hunt.services.credentials import CredentialsService
from macro_hunt.services.meals import MealSyncService
from macro_hunt.services.stats import StatsService
from macro_hunt.services.vision import VisionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    credentials_service: CredentialsService
    vision_service: VisionService
    meal_sync_service: MealSyncService
    stats_service: StatsService
    close_resources: Callable[[], Awaitable[None]]


def default_credentials(settings: Settings) -> Credentials:
    """Build credential defaults from environment settings."""
    return Credentials(
        craft_token=settings.craft_token,
        space_id=settings.craft_space_id,
        collection_id=settings.craft_collection_id,
        gemini_key=settings.gemini_api_key,
        daily_calorie_goal=settings.daily_calorie_goal,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    meal_repository = SupabaseMealRepository(supabase_client)
    credentials_service = CredentialsService(
        repository=SupabaseCredentialsRepository(supabase_client),
        defaults=default_credentials(resolved_settings),
    )
    transport = HttpxTransport.create(
        request_timeout=resolved_settings.request_timeout_seconds,
        resource_timeout=resolved_settings.resource_timeout_seconds,
        connectivity_poll_interval=resolved_settings.connectivity_poll_seconds,
    )
    executor = RetryingExecutor(
        transport=transport,
        max_attempts=resolved_settings.retry_max_attempts,
        base_delay=resolved_settings.retry_base_delay_seconds,
    )
    analysis_executor = RetryingExecutor(transport=transport, max_attempts=1)

    def vision_client(api_key: str) -> GeminiVisionClient:
        return GeminiVisionClient(
            executor=analysis_executor,
            api_key=api_key,
            endpoint=resolved_settings.gemini_endpoint,
        )

    def document_client(credentials: Credentials) -> CraftDocumentClient:
        return CraftDocumentClient(
            executor=executor,
            token=credentials.craft_token,
            space_id=credentials.space_id,
            base_url_template=resolved_settings.craft_base_url,
        )

    vision_service = VisionService(
        client_factory=vision_client,
        api_key_provider=lambda: credentials_service.current.gemini_key,
    )
    meal_sync_service = MealSyncService(
        repository=meal_repository,
        credentials_provider=lambda: credentials_service.current,
        client_factory=document_client,
    )
    stats_service = StatsService(
        repository=meal_repository,
        timezone_name=resolved_settings.timezone,
    )

    async def close_resources() -> None:
        await transport.close()

    return AppContainer(
        settings=resolved_settings,
        credentials_service=credentials_service,
        vision_service=vision_service,
        meal_sync_service=meal_sync_service,
        stats_service=stats_service,
        close_resources=close_resources,
    )
