"""Canonical Pydantic models shared across all swaggerdocs modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into three groups:

**Configuration models** -- built once at startup from the environment:
    :class:`AuthType`, :class:`AuthSpec`, and :class:`Settings`.

**Document models** -- produced by the decoder and merger:
    :class:`SchemaKind`, :class:`SchemaVersion`, :class:`DocumentInfo`,
    :class:`TagInfo`, :class:`ParsedDocument`, :class:`SourceTaggedDocument`,
    and :class:`CompositeDocument`.

**Resolution and query models** -- produced by the resolver and the query
functions:
    :class:`RegistryEntry`, :class:`SourceRegistry`, :class:`SourceFailure`,
    :class:`Resolution`, and :class:`EndpointInfo`.

Document models are deliberately lenient. No structural validation happens
while decoding, so a field of the wrong type is cast to an empty value
instead of failing; unknown top-level keys are preserved via
``extra="allow"`` so that a document can be handed back verbatim.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# --- Configuration ---


class AuthType(str, enum.Enum):
    """Credential strategies supported by the auth decorator."""

    NONE = "none"
    BASIC = "basic"
    BEARER = "bearer"
    API_KEY = "apiKey"


class AuthSpec(BaseModel):
    """Credentials attached to every outbound document request.

    Supplied once at startup and immutable for the process lifetime. Only
    the fields relevant to ``type`` are consulted; a missing or empty
    credential simply disables that strategy.

    Example::

        AuthSpec(type="apiKey", api_key="s3cret", api_key_header="X-Key")
    """

    model_config = ConfigDict(frozen=True)

    type: AuthType = AuthType.NONE
    username: Optional[str] = None
    password: Optional[str] = None
    token: Optional[str] = None
    api_key: Optional[str] = None
    api_key_header: str = Field(
        default="X-API-Key", description="Header name for apiKey auth"
    )


class Settings(BaseModel):
    """Effective runtime configuration.

    Resolved by :func:`~swaggerdocs.config.load_settings` from environment
    variables and the optional project config file.
    """

    default_url: Optional[str] = Field(
        default=None, description="Documentation URL used when none is given"
    )
    auth: AuthSpec = Field(default_factory=AuthSpec)
    cache_ttl_ms: int = Field(
        default=300_000, ge=0, description="Cache time-to-live in milliseconds"
    )
    timeout: float = Field(
        default=30.0, gt=0, description="HTTP timeout in seconds"
    )


# --- Documents ---


class SchemaKind(str, enum.Enum):
    """Document generation; decides where schema definitions live."""

    MODERN = "openapi"
    LEGACY = "swagger"


class SchemaVersion(BaseModel):
    """The ``openapi`` / ``swagger`` marker of a document."""

    kind: SchemaKind
    version: str = ""


def _as_mapping(value: Any) -> Any:
    if value is None or isinstance(value, dict):
        return value
    return {}


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


class DocumentInfo(BaseModel):
    """The document's *Info Object*, passed through verbatim."""

    model_config = ConfigDict(extra="allow")

    title: str = ""
    version: str = ""
    description: Optional[str] = None

    @field_validator("title", "version", mode="before")
    @classmethod
    def _required_text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("description", mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> Optional[str]:
        return _as_text(value)


class TagInfo(BaseModel):
    """A top-level tag declaration; unique by ``name``."""

    model_config = ConfigDict(extra="allow")

    name: str
    description: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def _name_text(cls, value: Any) -> str:
        return str(value)

    @field_validator("description", mode="before")
    @classmethod
    def _description_text(cls, value: Any) -> Optional[str]:
        return _as_text(value)


class ParsedDocument(BaseModel):
    """Normalized shape of one fetched OpenAPI or Swagger document.

    ``paths`` and schema maps keep the insertion order of the raw payload.
    Any top-level key not modelled here (``servers``, ``host``,
    ``securityDefinitions``, vendor extensions) is kept in ``model_extra``.
    """

    model_config = ConfigDict(extra="allow")

    openapi: Optional[str] = None
    swagger: Optional[str] = None
    info: DocumentInfo = Field(default_factory=DocumentInfo)
    paths: dict[str, Any] = Field(default_factory=dict)
    components: Optional[dict[str, Any]] = None
    definitions: Optional[dict[str, Any]] = None
    tags: list[TagInfo] = Field(default_factory=list)

    @field_validator("openapi", "swagger", mode="before")
    @classmethod
    def _version_text(cls, value: Any) -> Optional[str]:
        # YAML reads an unquoted ``swagger: 2.0`` as a float.
        return _as_text(value)

    @field_validator("info", mode="before")
    @classmethod
    def _info_mapping(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else {}

    @field_validator("paths", mode="before")
    @classmethod
    def _paths_mapping(cls, value: Any) -> dict[str, Any]:
        if not isinstance(value, dict):
            return {}
        return {str(key): item for key, item in value.items()}

    @field_validator("components", "definitions", mode="before")
    @classmethod
    def _optional_mapping(cls, value: Any) -> Any:
        return _as_mapping(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _tag_list(cls, value: Any) -> list[Any]:
        if not isinstance(value, list):
            return []
        return [
            tag for tag in value
            if isinstance(tag, dict) and tag.get("name") is not None
        ]

    @property
    def schema_version(self) -> SchemaVersion:
        """Modern when an ``openapi`` marker is set, legacy otherwise."""
        if self.openapi:
            return SchemaVersion(kind=SchemaKind.MODERN, version=self.openapi)
        return SchemaVersion(kind=SchemaKind.LEGACY, version=self.swagger or "")

    @property
    def security_schemes(self) -> Optional[dict[str, Any]]:
        """``components.securitySchemes`` when present."""
        if self.components is None:
            return None
        schemes = self.components.get("securitySchemes")
        return schemes if isinstance(schemes, dict) else None

    def as_dict(self) -> dict[str, Any]:
        """Return the plain OpenAPI/Swagger mapping without provenance fields."""
        return self.model_dump(exclude_none=True, exclude={"source", "sources"})


class SourceTaggedDocument(ParsedDocument):
    """A :class:`ParsedDocument` labelled with the registry source it came from.

    ``source`` is ``None`` for the implicit unnamed source of single-document
    mode.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    source: Optional[str] = None

    @classmethod
    def from_document(
        cls, document: ParsedDocument, source: Optional[str]
    ) -> SourceTaggedDocument:
        """Copy *document* and attach the provenance label *source*."""
        data = document.model_dump()
        data["source"] = source
        return cls.model_validate(data)


class CompositeDocument(ParsedDocument):
    """The merge of one or more :class:`SourceTaggedDocument` objects.

    ``sources`` lists the contributing source labels in merge order.
    """

    sources: list[Optional[str]] = Field(default_factory=list)


# --- Resolution ---


class RegistryEntry(BaseModel):
    """One ``urls`` entry of a Swagger UI ``swagger-config.json``."""

    model_config = ConfigDict(extra="allow")

    url: str
    name: str


class SourceRegistry(BaseModel):
    """Parsed ``swagger-config.json`` of a documentation hub.

    Only ``urls`` is interpreted; other Swagger UI settings (``dom_id``,
    ``configUrl``, ...) are preserved as extras.
    """

    model_config = ConfigDict(extra="allow")

    urls: list[RegistryEntry] = Field(default_factory=list)

    @field_validator("urls", mode="before")
    @classmethod
    def _urls_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("urls")
    @classmethod
    def _unique_names(cls, value: list[RegistryEntry]) -> list[RegistryEntry]:
        seen: set[str] = set()
        for entry in value:
            if entry.name in seen:
                raise ValueError(f"duplicate source name '{entry.name}'")
            seen.add(entry.name)
        return value


class SourceFailure(BaseModel):
    """Diagnostic record for a hub sub-source that was skipped."""

    name: str
    url: str
    message: str


class Resolution(BaseModel):
    """Output of :meth:`~swaggerdocs.fetch.resolver.SourceResolver.resolve`.

    ``documents`` is in fetch-success order. ``registry`` is ``None`` in
    single-document mode.
    """

    documents: list[SourceTaggedDocument] = Field(default_factory=list)
    registry: Optional[SourceRegistry] = None
    failures: list[SourceFailure] = Field(default_factory=list)


# --- Queries ---


class EndpointInfo(BaseModel):
    """One path + HTTP method pair extracted from a document."""

    model_config = ConfigDict(populate_by_name=True)

    path: str
    method: str
    summary: Optional[str] = None
    description: Optional[str] = None
    operation_id: Optional[str] = Field(default=None, alias="operationId")
    parameters: Optional[list[Any]] = None
    request_body: Optional[Any] = Field(default=None, alias="requestBody")
    responses: Optional[dict[str, Any]] = None
    tags: Optional[list[str]] = None
