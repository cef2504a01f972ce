from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Generic, List, Optional, TypeVar

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaError

from ..schemas.task import TaskCreated, TaskRead

logger = logging.getLogger(__name__)

T = TypeVar("T")

_TASK_LIST = TypeAdapter(List[TaskRead])


@dataclass(frozen=True)
class ApiError:
    message: str
    status_code: Optional[int] = None


@dataclass(frozen=True)
class ApiResult(Generic[T]):
    """Either a value or an error; calls never raise on HTTP or network failure."""

    value: Optional[T] = None
    error: Optional[ApiError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "ApiResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, message: str, status_code: Optional[int] = None) -> "ApiResult[T]":
        return cls(error=ApiError(message=message, status_code=status_code))


class TaskApiClient:
    """Async calls to the task collection at ``base_url`` (e.g. ``http://host:3030/tasks``)."""

    def __init__(self, base_url: str, http: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url.rstrip("/")
        self._http = http
        self._owns_http = http is None

    @property
    def http(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(timeout=None)
        return self._http

    async def aclose(self) -> None:
        if self._owns_http and self._http is not None:
            await self._http.aclose()
            self._http = None

    def _url(self, suffix: str = "") -> str:
        return f"{self.base_url}{suffix}"

    async def _send(self, method: str, url: str, **kwargs: Any) -> ApiResult[httpx.Response]:
        try:
            response = await self.http.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            return ApiResult.failure(f"Could not reach the server: {exc}")

        if response.is_error:
            logger.warning("%s %s -> %s %s", method, url, response.status_code, response.text)
            return ApiResult.failure(response.text or response.reason_phrase, response.status_code)
        return ApiResult.success(response)

    async def list_tasks(self, sort_by_date: bool = False) -> ApiResult[List[TaskRead]]:
        params = {"sort": "date"} if sort_by_date else None
        result = await self._send("GET", self._url(), params=params)
        if not result.ok:
            return ApiResult.failure(result.error.message, result.error.status_code)
        try:
            return ApiResult.success(_TASK_LIST.validate_python(result.value.json()))
        except (ValueError, SchemaError) as exc:
            logger.warning("Unexpected task list payload: %s", exc)
            return ApiResult.failure("Unexpected response from the server.")

    async def create_task(self, title: str, due_date: str) -> ApiResult[TaskCreated]:
        result = await self._send("POST", self._url(), json={"title": title, "due_date": due_date})
        if not result.ok:
            return ApiResult.failure(result.error.message, result.error.status_code)
        try:
            return ApiResult.success(TaskCreated.model_validate(result.value.json()))
        except (ValueError, SchemaError) as exc:
            logger.warning("Unexpected create payload: %s", exc)
            return ApiResult.failure("Unexpected response from the server.")

    async def complete_task(self, task_id: int) -> ApiResult[str]:
        return await self._text("PUT", self._url(f"/{task_id}/done"))

    async def update_task(self, task_id: int, title: str, due_date: str) -> ApiResult[str]:
        return await self._text(
            "PUT", self._url(f"/{task_id}"), json={"title": title, "due_date": due_date}
        )

    async def delete_task(self, task_id: int) -> ApiResult[str]:
        return await self._text("DELETE", self._url(f"/{task_id}"))

    async def _text(self, method: str, url: str, **kwargs: Any) -> ApiResult[str]:
        result = await self._send(method, url, **kwargs)
        if not result.ok:
            return ApiResult.failure(result.error.message, result.error.status_code)
        return ApiResult.success(result.value.text)
