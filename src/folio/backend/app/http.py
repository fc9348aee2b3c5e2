"""JSON problem payloads returned by the Flask blueprints."""

from __future__ import annotations

from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Mapping

from flask import jsonify

from folio.backend.app.localization import BundleFetchError

# Fetch failures that mean "no such bundle" rather than "bundle is broken".
_MISSING_BUNDLE_REASONS = frozenset({"bundle not found", "invalid language code", "HTTP 404"})


@dataclass(frozen=True)
class ProblemResponse:
    error: str
    status: int
    message: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.error, **self.extra}
        if self.message:
            payload["message"] = self.message
        return payload

    def to_response(self) -> tuple[Any, int]:
        return jsonify(self.as_dict()), self.status


def problem_response(error: str, *, status: int, message: str | None = None, **extra: Any) -> ProblemResponse:
    return ProblemResponse(error=error, status=status, message=message, extra=extra)


def bundle_problem(error: BundleFetchError) -> ProblemResponse:
    """Map a failed bundle fetch to ``404 not_found`` or ``502 bundle_unavailable``."""

    if error.reason in _MISSING_BUNDLE_REASONS:
        return problem_response(
            "not_found", status=HTTPStatus.NOT_FOUND, message=str(error), language=error.language
        )
    return problem_response(
        "bundle_unavailable",
        status=HTTPStatus.BAD_GATEWAY,
        message=str(error),
        language=error.language,
        reason=error.reason,
    )


__all__ = ["ProblemResponse", "bundle_problem", "problem_response"]
