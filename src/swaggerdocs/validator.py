"""Structural validation of API documents.

Validation is a collaborator of the service, not part of the fetch
pipeline: the pipeline accepts any YAML/JSON mapping, and
:meth:`~swaggerdocs.service.SwaggerDocsService.validate_document` asks a
:class:`DocumentValidator` for a pass/fail verdict afterwards.

:class:`StructuralValidator` is the built-in implementation. It checks the
skeleton every OpenAPI 3.x / Swagger 2.0 document must have:

* an ``openapi`` marker starting with ``3.`` or ``swagger: "2.0"``,
* ``info.title`` and ``info.version`` strings,
* a ``paths`` mapping (optional from OpenAPI 3.1 on) whose keys start with
  ``/``,
* a ``responses`` mapping on every operation.

It does not check schemas or resolve ``$ref`` pointers. A full meta-schema
validator can be plugged in by implementing :class:`DocumentValidator`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from swaggerdocs.exceptions import DocumentValidationError
from swaggerdocs.parser.query import HTTP_METHODS


class DocumentValidator(ABC):
    """Interface for document validators."""

    @abstractmethod
    def validate(self, document: dict[str, Any]) -> None:
        """Check *document* and return normally when it is valid.

        Raises:
            DocumentValidationError: If the document is malformed.
        """
        ...


class _InfoSkeleton(BaseModel):
    model_config = ConfigDict(extra="allow", strict=True)

    title: str
    version: str


class _OperationSkeleton(BaseModel):
    model_config = ConfigDict(extra="allow")

    responses: dict[str, Any]

    @field_validator("responses", mode="before")
    @classmethod
    def _status_keys(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {str(code): body for code, body in value.items()}
        return value


class _DocumentSkeleton(BaseModel):
    model_config = ConfigDict(extra="allow")

    openapi: Optional[str] = None
    swagger: Optional[str] = None
    info: _InfoSkeleton
    paths: Optional[dict[str, dict[str, Any]]] = None

    @field_validator("paths")
    @classmethod
    def _check_paths(
        cls, value: Optional[dict[str, dict[str, Any]]]
    ) -> Optional[dict[str, dict[str, Any]]]:
        if value is None:
            return value
        for path, path_item in value.items():
            if not path.startswith("/"):
                raise ValueError(f"path '{path}' must start with '/'")
            for method, operation in path_item.items():
                if method.lower() not in HTTP_METHODS:
                    continue
                try:
                    _OperationSkeleton.model_validate(operation)
                except ValidationError as exc:
                    raise ValueError(
                        f"operation {method.upper()} {path} is malformed: {exc}"
                    ) from exc
        return value

    @model_validator(mode="after")
    def _check_version(self) -> _DocumentSkeleton:
        if self.openapi is not None:
            if not self.openapi.startswith("3."):
                raise ValueError(f"unsupported openapi version '{self.openapi}'")
            if self.paths is None and not self.openapi.startswith("3.0"):
                return self
        elif self.swagger is not None:
            if self.swagger != "2.0":
                raise ValueError(f"unsupported swagger version '{self.swagger}'")
        else:
            raise ValueError("missing 'openapi' or 'swagger' version field")
        if self.paths is None:
            raise ValueError("missing 'paths'")
        return self


class StructuralValidator(DocumentValidator):
    """Validate the required skeleton of OpenAPI 3.x and Swagger 2.0 documents."""

    def validate(self, document: dict[str, Any]) -> None:
        try:
            _DocumentSkeleton.model_validate(document)
        except ValidationError as exc:
            raise DocumentValidationError(f"Invalid API document: {exc}") from exc
