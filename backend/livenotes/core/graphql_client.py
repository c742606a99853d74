"""
GraphQL API client.

TRANSPORT:
  1. Queries & mutations: POST {"query", "variables"} as JSON,
     response body {"data": ..., "errors": [...]}
  2. Subscriptions: same POST with "Accept: text/event-stream".
     The server keeps the response open and streams Server-Sent Events:
       event: next       data: {"data": {...}}
       event: complete   (stream ends)
  3. Auth: optional API key in the "x-api-key" header.
"""

import json
import logging
from typing import AsyncIterator

import httpx

from livenotes.config import get_settings
from livenotes.core.exceptions import GraphQLRequestError

logger = logging.getLogger(__name__)


class GraphQLClient:
    """Async client for a GraphQL endpoint (httpx)."""

    def __init__(
        self,
        url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        settings = get_settings()
        self.url = url or settings.GRAPHQL_URL
        api_key = settings.GRAPHQL_API_KEY if api_key is None else api_key
        timeout = float(settings.GRAPHQL_TIMEOUT if timeout is None else timeout)

        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if api_key:
            headers["x-api-key"] = api_key

        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers=headers,
            transport=transport,
        )

    async def execute(self, query: str, variables: dict | None = None) -> dict:
        """Run a query or mutation and return its "data" object.

        Raises:
            GraphQLRequestError: On transport failure, non-2xx status,
                or a response carrying GraphQL errors.
        """
        try:
            response = await self._client.post(
                self.url,
                json={"query": query, "variables": variables or {}},
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise GraphQLRequestError(
                f"GraphQL API returned HTTP {e.response.status_code}",
                detail=e.response.text[:500],
            ) from e
        except httpx.HTTPError as e:
            raise GraphQLRequestError("GraphQL API unreachable", detail=str(e)) from e
        except ValueError as e:
            raise GraphQLRequestError("GraphQL API returned invalid JSON", detail=str(e)) from e

        return _unwrap(payload)

    async def subscribe(self, query: str, variables: dict | None = None) -> AsyncIterator[dict]:
        """Open a subscription and yield the "data" object of every event.

        Ends when the server sends "complete" or closes the stream.
        """
        try:
            async with self._client.stream(
                "POST",
                self.url,
                json={"query": query, "variables": variables or {}},
                headers={"Accept": "text/event-stream"},
                timeout=httpx.Timeout(self._client.timeout.connect, read=None),
            ) as response:
                if response.status_code >= 400:
                    body = await response.aread()
                    raise GraphQLRequestError(
                        f"GraphQL subscription refused with HTTP {response.status_code}",
                        detail=body.decode("utf-8", errors="replace")[:500],
                    )

                async for event, data in _iter_sse(response.aiter_lines()):
                    if event == "complete":
                        return
                    if event != "next":
                        logger.debug(f"Ignoring SSE event '{event}'")
                        continue
                    try:
                        payload = _unwrap(json.loads(data))
                    except ValueError:
                        logger.warning(f"Skipping malformed subscription event: {data[:120]}")
                        continue
                    except GraphQLRequestError as e:
                        logger.warning(f"Skipping subscription event: {e.message} ({e.detail})")
                        continue
                    yield payload
        except httpx.HTTPError as e:
            raise GraphQLRequestError("GraphQL subscription dropped", detail=str(e)) from e

    async def aclose(self) -> None:
        await self._client.aclose()


def _unwrap(payload) -> dict:
    """Return payload["data"], raising on a GraphQL "errors" array.

    Raises:
        GraphQLRequestError: If the body or its "data" is not a JSON object,
            or the body carries errors.
    """
    if not isinstance(payload, dict):
        raise GraphQLRequestError(
            "GraphQL API returned invalid JSON",
            detail=f"expected an object, got {type(payload).__name__}",
        )
    errors = payload.get("errors")
    if errors:
        if not isinstance(errors, list):
            errors = [errors]
        messages = "; ".join(
            str(err.get("message", err)) if isinstance(err, dict) else str(err) for err in errors
        )
        raise GraphQLRequestError("GraphQL API returned errors", detail=messages)
    data = payload.get("data") or {}
    if not isinstance(data, dict):
        raise GraphQLRequestError(
            "GraphQL API returned invalid JSON",
            detail=f"expected 'data' to be an object, got {type(data).__name__}",
        )
    return data


async def _iter_sse(lines: AsyncIterator[str]) -> AsyncIterator[tuple[str, str]]:
    """Group raw SSE lines into (event, data) pairs.

    Events are separated by a blank line; multiple "data:" lines are joined
    with newlines; lines starting with ":" are comments.
    """
    event = "message"
    data: list[str] = []

    async for line in lines:
        if not line:
            if data or event != "message":
                yield event, "\n".join(data)
            event, data = "message", []
            continue
        if line.startswith(":"):
            continue

        field, _, value = line.partition(":")
        value = value[1:] if value.startswith(" ") else value
        if field == "event":
            event = value
        elif field == "data":
            data.append(value)

    if data or event != "message":
        yield event, "\n".join(data)
