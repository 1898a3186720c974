from __future__ import annotations

import contextvars
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator

# Per-thread/async task context attached to every log record.
request_id_var = contextvars.ContextVar("request_id", default=None)
source_var = contextvars.ContextVar("source", default=None)
line_no_var = contextvars.ContextVar("line_no", default=None)

_VARS = {
    "request_id": request_id_var,
    "source": source_var,
    "line_no": line_no_var,
}


def new_request_id() -> str:
    return str(uuid.uuid4())


def get_context_fields() -> Dict[str, Any]:
    return {name: var.get() for name, var in _VARS.items()}


@contextmanager
def request_scope(**fields: Any) -> Iterator[None]:
    """
    Temporarily sets the given context fields, restoring the old values on
    exit. Unknown field names raise KeyError before anything is set.
    """
    unknown = sorted(set(fields) - set(_VARS))
    if unknown:
        raise KeyError(f"unknown context fields: {unknown}")
    tokens = [(_VARS[name], _VARS[name].set(value)) for name, value in fields.items()]
    try:
        yield
    finally:
        for var, tok in reversed(tokens):
            var.reset(tok)
