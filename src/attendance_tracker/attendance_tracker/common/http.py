from __future__ import annotations

from typing import Optional

from flask import jsonify

from ..core.exceptions import DomainError
from ..core.result import ErrorKind, OperationResult

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NO_OP: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.NO_CHANGE: 404,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.STORAGE: 500,
}


def status_for(kind: Optional[ErrorKind]) -> int:
    return STATUS_BY_KIND.get(kind, 500)


def error_response(error: DomainError):
    return jsonify({"success": False, "message": str(error)}), status_for(error.kind)


def result_response(result: OperationResult, *, success_status: int = 200):
    """Render a reported result; the failure status comes from its kind."""
    if result.success:
        return jsonify(result.to_dict()), success_status
    return jsonify(result.to_dict()), status_for(result.kind)
