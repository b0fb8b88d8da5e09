"""Observability helpers for instrumenting store-facing operations."""

from __future__ import annotations

import inspect
import logging
import time
from functools import wraps
from typing import Any, Callable, Dict, ParamSpec, TypeVar

from pydantic import BaseModel, ValidationError

from stylist_app.logging_config import ensure_correlation_id, get_logger, log_event, redact_for_log

LOGGER = get_logger(__name__)
P = ParamSpec("P")
R = TypeVar("R")

_PREVIEW_LIMIT = 6


def _preview_arguments(arguments: Dict[str, Any]) -> Dict[str, Any]:
    preview: Dict[str, Any] = {}
    for key, value in arguments.items():
        if key == "self":
            continue
        if len(preview) >= _PREVIEW_LIMIT:
            preview["truncated"] = True
            break
        preview[key] = value.model_dump() if isinstance(value, BaseModel) else value
    return redact_for_log(preview)


def _summarise_result(result: Any) -> Dict[str, Any]:
    if result is None:
        return {"found": False}
    if isinstance(result, bool):
        return {"result": result}
    if isinstance(result, (list, tuple)):
        return {"count": len(result)}
    if isinstance(result, dict) and "status" in result:
        return {"status": result["status"]}
    return {}


def instrument_operation(
    operation: str,
    input_model: type[BaseModel] | None = None,
    payload_arg: str = "payload",
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Log start, completion and failure of ``operation`` with durations.

    When ``input_model`` is given, the argument named ``payload_arg`` is
    validated into that model before the call. Validation failures are logged
    and re-raised.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        signature = inspect.signature(func)

        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            correlation_id = ensure_correlation_id()
            start = time.perf_counter()
            bound = signature.bind(*args, **kwargs)

            if input_model and payload_arg in bound.arguments:
                raw = bound.arguments[payload_arg]
                try:
                    bound.arguments[payload_arg] = (
                        raw if isinstance(raw, input_model) else input_model.model_validate(raw)
                    )
                except ValidationError as exc:
                    log_event(
                        LOGGER,
                        logging.WARNING,
                        "operation_validation_failed",
                        operation_name=operation,
                        correlation_id=correlation_id,
                        errors=exc.errors(include_url=False, include_context=False),
                    )
                    raise

            log_event(
                LOGGER,
                logging.INFO,
                "operation_started",
                operation_name=operation,
                correlation_id=correlation_id,
                arguments=_preview_arguments(bound.arguments),
            )
            try:
                result = func(*bound.args, **bound.kwargs)
            except Exception:
                log_event(
                    LOGGER,
                    logging.ERROR,
                    "operation_failed",
                    operation_name=operation,
                    correlation_id=correlation_id,
                    duration_ms=round((time.perf_counter() - start) * 1000, 2),
                    exc_info=True,
                )
                raise
            log_event(
                LOGGER,
                logging.INFO,
                "operation_completed",
                operation_name=operation,
                correlation_id=correlation_id,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
                **_summarise_result(result),
            )
            return result

        return wrapper

    return decorator


__all__ = ["instrument_operation"]
