"""Error taxonomy for snippet generation.

Every resolution step fails fast with one of these. Batch operations wrap
the first failure in SnippetGenerateError so the broken endpoint can be
located in the source document.
"""

from __future__ import annotations

from typing import Any


class SnippetGenError(Exception):
    """Base class for every error raised by snippetgen."""


class ReferenceResolutionError(SnippetGenError):
    """A $ref pointer is empty, external, unresolvable or cyclic."""

    def __init__(self, ref: str, reason: str = "cannot be resolved") -> None:
        super().__init__(f"The reference {ref!r} {reason}")
        self.ref = ref


class InvalidAuthTypeError(SnippetGenError):
    def __init__(self, auth_type: str) -> None:
        super().__init__(f"The auth type {auth_type} is invalid or not implemented")
        self.auth_type = auth_type


class InvalidSchemeReferenceError(SnippetGenError):
    def __init__(self, scheme_reference: str) -> None:
        super().__init__(
            f"The scheme reference {scheme_reference} is not valid or not implemented"
        )
        self.scheme_reference = scheme_reference


class NoServerError(SnippetGenError):
    def __init__(self) -> None:
        super().__init__(
            "In order to use code generation feature, servers must be provided on openapi spec"
        )


class InvalidPathError(SnippetGenError):
    def __init__(self, path: str) -> None:
        super().__init__(f"The path {path} is not available")
        self.path = path


class InvalidSchemeError(SnippetGenError):
    def __init__(self, scheme_path: str, scheme_id: str) -> None:
        super().__init__(f"The scheme {scheme_id} is not available for {scheme_path}")
        self.scheme_path = scheme_path
        self.scheme_id = scheme_id


class InvalidMethodError(SnippetGenError):
    def __init__(self, path: str, method: str) -> None:
        super().__init__(f"The method {method} is not available for {path}")
        self.path = path
        self.method = method


class InvalidLanguageError(SnippetGenError):
    def __init__(self, language: str) -> None:
        super().__init__(f"The language {language} is not available")
        self.language = language


class SnippetGenerateError(SnippetGenError):
    """Wraps the failure of one operation during whole-document generation."""

    def __init__(
        self,
        operation: dict[str, Any] | None,
        path: str,
        method: str,
        cause: BaseException,
    ) -> None:
        super().__init__(f"Error generating snippet code for {method} on {path}")
        self.operation = operation or {}
        self.path = path
        self.method = method
        self.cause = cause

    def __str__(self) -> str:
        return (
            f"Error generating snippet code on {self.path} for {self.method}.\n"
            f" - Parameters: {self.operation.get('parameters')}\n"
            f" - Request Body: {self.operation.get('requestBody')}\n"
            f" - Cause: {type(self.cause).__name__}: {self.cause}"
        )
