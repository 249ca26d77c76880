"""Craft collections API client for mirroring meals."""

import json
import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from urllib.parse import quote

from pydantic import ValidationError

from macro_hunt.adapters.craft_models import (
    CraftAppendBlocksRequest,
    CraftBlockPosition,
    CraftCreateItemsRequest,
    CraftCreateItemsResponse,
    CraftDeleteItemsRequest,
    CraftItem,
    CraftItemProperties,
    CraftTextBlock,
    to_json_bytes,
)
from macro_hunt.adapters.http_transport import HttpRequest, HttpResponse
from macro_hunt.adapters.retrying_executor import RetryingExecutor
from macro_hunt.domain.meals import MealRecord
from macro_hunt.errors import (
    DecodingError,
    EmptyResponseError,
    InvalidResponseError,
)
from macro_hunt.media import detect_mime_type
from macro_hunt.services.meals import DocumentSyncClient

_logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://connect.craft.do/links/{space_id}/api/v1"


@dataclass
class CraftDocumentClient(DocumentSyncClient):
    """Document sync client scoped to one Craft space."""

    executor: RetryingExecutor
    token: str
    space_id: str
    base_url_template: str = DEFAULT_BASE_URL

    @property
    def base_url(self) -> str:
        """Return the API root for the configured space."""
        return self.base_url_template.format(space_id=quote(self.space_id, safe=""))

    async def create_record(self, collection_id: str, meal: MealRecord) -> str:
        """Create a collection item for the meal and return its id."""
        payload = CraftCreateItemsRequest(
            items=[
                CraftItem(
                    meal_name=meal.name,
                    properties=CraftItemProperties(
                        date=_calendar_date(meal.date),
                        meal_type=meal.meal_type.value,
                        calories=meal.calories,
                        protein_g=meal.protein,
                        carbs_g=meal.carbs,
                        fat_g=meal.fat,
                        key_nutrients=meal.key_nutrients,
                        notes=meal.notes,
                    ),
                )
            ]
        )
        response = await self._send(
            "POST", _items_endpoint(collection_id), body=to_json_bytes(payload)
        )
        created = _parse_created(response)
        document_id = created.items[0].id.strip() if created.items else ""
        if not document_id:
            raise EmptyResponseError()
        return document_id

    async def delete_record(self, collection_id: str, document_id: str) -> None:
        """Delete a collection item by id."""
        payload = CraftDeleteItemsRequest(ids_to_delete=[document_id])
        await self._send(
            "DELETE", _items_endpoint(collection_id), body=to_json_bytes(payload)
        )

    async def attach_image(self, document_id: str, image: bytes) -> None:
        """Upload one image to the end of the document."""
        await self._send(
            "POST",
            "/upload",
            body=image,
            content_type=detect_mime_type(image),
            params={"position": "end", "pageId": document_id},
        )

    async def append_text(self, document_id: str, text: str) -> None:
        """Append a text block to the document; blank text is skipped."""
        if not text.strip():
            return
        payload = CraftAppendBlocksRequest(
            blocks=[CraftTextBlock(markdown=text)],
            position=CraftBlockPosition(page_id=document_id),
        )
        await self._send("POST", "/blocks", body=to_json_bytes(payload))

    async def attach_content(
        self, document_id: str, photos: list[bytes], description: str
    ) -> None:
        """Upload photos in order, then append the description."""
        for index, photo in enumerate(photos):
            _logger.info(
                "Uploading photo %s/%s to document %s",
                index + 1,
                len(photos),
                document_id,
            )
            await self.attach_image(document_id, photo)
        await self.append_text(document_id, description)

    async def _send(
        self,
        method: str,
        endpoint: str,
        *,
        body: bytes | None = None,
        content_type: str = "application/json",
        params: dict[str, str] | None = None,
    ) -> HttpResponse:
        request = HttpRequest(
            method=method,
            url=f"{self.base_url}{endpoint}",
            headers={
                "Authorization": f"Bearer {self.token}",
                "Content-Type": content_type,
            },
            body=body,
            params=params,
        )
        return await self.executor.execute(request)


def _items_endpoint(collection_id: str) -> str:
    return f"/collections/{quote(collection_id, safe='')}/items"


def _calendar_date(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(UTC)
    return value.date().isoformat()


def _parse_created(response: HttpResponse) -> CraftCreateItemsResponse:
    try:
        data = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodingError(f"Invalid create response: {response.text[:200]}") from exc
    if not isinstance(data, dict):
        raise InvalidResponseError()
    try:
        return CraftCreateItemsResponse.model_validate(data)
    except ValidationError as exc:
        raise DecodingError(f"Invalid create response: {response.text[:200]}") from exc
