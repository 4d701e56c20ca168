from __future__ import annotations

import httpx
import pytest

from formio_import.infrastructure.external.formio.formio_client import FormioClient
from formio_import.shared.exceptions.domain import SourceUnavailableException


def _client(handler) -> FormioClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return FormioClient("http://formio.test/", client=http, max_number_of_forms=50)


@pytest.mark.asyncio
async def test_fetch_forms_queries_tag_and_limit() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json=[
                {
                    "_id": "abc",
                    "path": "nav100717",
                    "title": "Søknad",
                    "components": [{"key": "fornavn"}],
                    "properties": {"skjemanummer": "NAV 10-07.17", "isTestForm": False, "tema": "HJE"},
                }
            ],
        )

    async with _client(handler) as client:
        listing = await client.fetch_forms()

    assert seen[0].url.path == "/form"
    assert seen[0].url.params["type"] == "form"
    assert seen[0].url.params["tag"] == "nav-skjema"
    assert seen[0].url.params["limit"] == "50"
    assert listing.forms[0].id == "abc"
    assert listing.forms[0].skjemanummer == "NAV 10-07.17"
    assert listing.forms[0].is_test_form is False
    assert '"tema": "HJE"' in listing.forms[0].properties_json()


@pytest.mark.asyncio
async def test_fetch_translations_scopes_by_form_path() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"data": {"language": "en", "i18n": {"Ja": "Yes"}}}])

    async with _client(handler) as client:
        submissions = await client.fetch_translations("nav100717")

    assert seen[0].url.path == "/language/submission"
    assert seen[0].url.params["data.name"] == "global.nav100717"
    assert seen[0].url.params["limit"] == "1000"
    assert submissions[0].data.i18n == {"Ja": "Yes"}


@pytest.mark.asyncio
async def test_fetch_global_translations_uses_global_namespace() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200, json=[{"data": {"language": "nn-NO", "i18n": {"required": "Du må fylle ut: {{field}}"}, "tag": "validering"}}]
        )

    async with _client(handler) as client:
        submissions = await client.fetch_global_translations()

    assert seen[0].url.params["data.name"] == "global"
    assert submissions[0].data.tag == "validering"


@pytest.mark.asyncio
async def test_non_success_status_raises_source_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    async with _client(handler) as client:
        with pytest.raises(SourceUnavailableException) as exc_info:
            await client.fetch_forms()

    assert exc_info.value.error_code == "SOURCE_UNAVAILABLE"
    assert exc_info.value.details["status_code"] == 503


@pytest.mark.asyncio
async def test_transport_error_raises_source_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        with pytest.raises(SourceUnavailableException):
            await client.fetch_global_translations()


@pytest.mark.asyncio
async def test_unexpected_payload_shape_raises_source_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"error": "not a list"})

    async with _client(handler) as client:
        with pytest.raises(SourceUnavailableException):
            await client.fetch_translations("nav100717")


@pytest.mark.asyncio
async def test_malformed_form_is_listed_as_invalid_without_failing_the_fetch() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json=[
                {"_id": "ok", "path": "nav100717", "properties": {"skjemanummer": "NAV 10-07.17"}},
                {"_id": "bad", "path": "nav100718", "properties": {"skjemanummer": None}},
            ],
        )

    async with _client(handler) as client:
        listing = await client.fetch_forms()

    assert [form.path for form in listing.forms] == ["nav100717"]
    assert len(listing.invalid) == 1
    assert listing.invalid[0].id == "bad"
    assert listing.invalid[0].path == "nav100718"
    assert listing.invalid[0].skjemanummer == ""
    assert "skjemanummer" in listing.invalid[0].error
