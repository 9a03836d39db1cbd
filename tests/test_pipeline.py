"""Tests for the cached fetch-resolve-merge pipeline."""

from __future__ import annotations

from typing import Any

import pytest

from swaggerdocs.cache import DocumentCache
from swaggerdocs.exceptions import FetchFailed, NoSourcesFound
from swaggerdocs.fetch import DocumentFetcher, SourceResolver
from swaggerdocs.models import AuthSpec
from swaggerdocs.output import OutputFormat, OutputManager, set_output
from swaggerdocs.parser.query import get_schemas, list_endpoints
from swaggerdocs.pipeline import DocumentPipeline

DIRECT = "https://api.example.com/openapi.json"
HUB = "https://docs.example.com/"
CONFIG = "https://docs.example.com/swagger-config.json"


def _pipeline(server, clock, ttl_ms: int = 300_000) -> DocumentPipeline:
    resolver = SourceResolver(DocumentFetcher(AuthSpec(), client=server.client()))
    return DocumentPipeline(resolver, ttl_ms, cache=DocumentCache(clock=clock))


def _service_doc(name: str, schema: str) -> dict[str, Any]:
    return {
        "openapi": "3.0.0",
        "info": {"title": f"{name} service", "version": "1"},
        "tags": [{"name": name.lower()}],
        "paths": {f"/{name.lower()}": {"get": {"tags": [name.lower()], "responses": {}}}},
        "components": {"schemas": {schema: {"type": "object"}}},
    }


@pytest.fixture
def hub(server) -> Any:
    """A hub listing A, B and C where B answers 500."""
    server.add(
        CONFIG,
        {
            "urls": [
                {"url": "/a/v3/api-docs", "name": "A"},
                {"url": "/b/v3/api-docs", "name": "B"},
                {"url": "/c/v3/api-docs", "name": "C"},
            ]
        },
    )
    server.add("https://docs.example.com/a/v3/api-docs", _service_doc("A", "Alpha"))
    server.add("https://docs.example.com/b/v3/api-docs", "down", status=500)
    server.add("https://docs.example.com/c/v3/api-docs", _service_doc("C", "Gamma"))
    return server


# ---------------------------------------------------------------------------
# Caching
# ---------------------------------------------------------------------------


class TestCaching:
    def test_fresh_hit_makes_no_requests(self, server, clock, openapi_doc) -> None:
        server.add(DIRECT, openapi_doc)
        pipeline = _pipeline(server, clock)
        first = pipeline.fetch(DIRECT)
        clock.advance(299)
        second = pipeline.fetch(DIRECT)
        assert second is first
        assert server.hits(DIRECT) == 1

    def test_stale_entry_is_refetched(self, server, clock, openapi_doc) -> None:
        server.add(DIRECT, openapi_doc)
        pipeline = _pipeline(server, clock)
        pipeline.fetch(DIRECT)
        clock.advance(300)
        pipeline.fetch(DIRECT)
        assert server.hits(DIRECT) == 2

    def test_refetch_picks_up_changes(self, server, clock, openapi_doc) -> None:
        server.add(DIRECT, openapi_doc)
        pipeline = _pipeline(server, clock)
        pipeline.fetch(DIRECT)
        openapi_doc["paths"]["/new"] = {"get": {}}
        server.add(DIRECT, openapi_doc)
        clock.advance(301)
        assert "/new" in pipeline.fetch(DIRECT).paths

    def test_zero_ttl_always_fetches(self, server, clock, openapi_doc) -> None:
        server.add(DIRECT, openapi_doc)
        pipeline = _pipeline(server, clock, ttl_ms=0)
        pipeline.fetch(DIRECT)
        pipeline.fetch(DIRECT)
        assert server.hits(DIRECT) == 2

    def test_urls_are_cached_independently(self, server, clock, openapi_doc, swagger_doc) -> None:
        other = "https://api.example.com/swagger.yaml"
        server.add(DIRECT, openapi_doc)
        server.add(other, swagger_doc)
        pipeline = _pipeline(server, clock)
        assert pipeline.fetch(DIRECT).openapi == "3.0.3"
        assert pipeline.fetch(other).swagger == "2.0"
        assert len(pipeline.cache) == 2

    def test_failure_is_not_cached(self, server, clock) -> None:
        pipeline = _pipeline(server, clock)
        with pytest.raises(FetchFailed):
            pipeline.fetch(DIRECT)
        assert DIRECT not in pipeline.cache


# ---------------------------------------------------------------------------
# Single-document mode
# ---------------------------------------------------------------------------


class TestSingleDocument:
    def test_composite_matches_source(self, server, clock, openapi_doc) -> None:
        server.add(DIRECT, openapi_doc)
        composite = _pipeline(server, clock).fetch(DIRECT)
        assert composite.info.title == "Combined API Documentation"
        assert composite.info.description == "Combined documentation from 1 API sources"
        assert len(list_endpoints(composite)) == 3
        assert list(get_schemas(composite)) == ["Pet"]

    def test_no_sources_are_exposed(self, server, clock, openapi_doc) -> None:
        server.add(DIRECT, openapi_doc)
        pipeline = _pipeline(server, clock)
        pipeline.fetch(DIRECT)
        assert pipeline.get_sources() == []
        assert pipeline.get_doc_by_source("") is None


# ---------------------------------------------------------------------------
# Hub mode
# ---------------------------------------------------------------------------


class TestHub:
    def test_partial_failure_merges_survivors(self, hub, clock, quiet_output) -> None:
        pipeline = _pipeline(hub, clock)
        composite = pipeline.fetch(HUB)
        assert list(composite.paths) == ["/a", "/c"]
        assert set(get_schemas(composite)) == {"Alpha", "Gamma"}
        assert [t.name for t in composite.tags] == ["a", "c"]
        assert composite.sources == ["A", "C"]
        assert composite.info.description == "Combined documentation from 3 API sources"

    def test_first_surviving_source_sets_version_and_security(
        self, server, clock, quiet_output, swagger_doc, openapi_doc
    ) -> None:
        server.add(
            CONFIG,
            {
                "urls": [
                    {"url": "/down/api-docs", "name": "down"},
                    {"url": "/legacy/api-docs", "name": "legacy"},
                    {"url": "/modern/api-docs", "name": "modern"},
                ]
            },
        )
        server.add("https://docs.example.com/down/api-docs", "boom", status=500)
        server.add("https://docs.example.com/legacy/api-docs", swagger_doc)
        server.add("https://docs.example.com/modern/api-docs", openapi_doc)

        composite = _pipeline(server, clock).fetch(HUB)

        assert composite.swagger == "2.0"
        assert composite.openapi is None
        assert composite.model_extra["securityDefinitions"] == swagger_doc["securityDefinitions"]
        assert composite.components is None
        assert set(composite.definitions) == {"User", "Pet"}
        assert set(get_schemas(composite)) == {"User", "Pet"}
        assert composite.sources == ["legacy", "modern"]

    def test_failures_are_recorded(self, hub, clock, quiet_output) -> None:
        pipeline = _pipeline(hub, clock)
        pipeline.fetch(HUB)
        assert [f.name for f in pipeline.failures] == ["B"]

    def test_sources_list_every_registry_entry(self, hub, clock, quiet_output) -> None:
        pipeline = _pipeline(hub, clock)
        pipeline.fetch(HUB)
        assert pipeline.get_sources() == [{"name": "A"}, {"name": "B"}, {"name": "C"}]

    def test_documents_are_retained_per_source(self, hub, clock, quiet_output) -> None:
        pipeline = _pipeline(hub, clock)
        pipeline.fetch(HUB)
        alpha = pipeline.get_doc_by_source("A")
        assert alpha is not None
        assert alpha.info.title == "A service"
        assert alpha.source == "A"
        assert pipeline.get_doc_by_source("B") is None
        assert pipeline.get_doc_by_source("Z") is None

    def test_later_direct_fetch_clears_hub_state(self, hub, clock, quiet_output, openapi_doc) -> None:
        hub.add(DIRECT, openapi_doc)
        pipeline = _pipeline(hub, clock)
        pipeline.fetch(HUB)
        pipeline.fetch(DIRECT)
        assert pipeline.get_sources() == []
        assert pipeline.get_doc_by_source("A") is None
        assert pipeline.failures == []

    def test_cache_hit_leaves_retained_state_alone(self, hub, clock, quiet_output, openapi_doc) -> None:
        hub.add(DIRECT, openapi_doc)
        pipeline = _pipeline(hub, clock)
        pipeline.fetch(HUB)
        pipeline.fetch(DIRECT)
        pipeline.fetch(HUB)
        assert hub.hits(CONFIG) == 1
        assert pipeline.get_sources() == []

    def test_partial_failure_is_reported(self, hub, clock, capsys) -> None:
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        _pipeline(hub, clock).fetch(HUB)
        err = capsys.readouterr().err
        assert "Loaded 2 of 3 API sources; skipped: B" in err

    def test_empty_registry_raises(self, server, clock) -> None:
        server.add(CONFIG, {"urls": []})
        with pytest.raises(NoSourcesFound):
            _pipeline(server, clock).fetch(HUB)
