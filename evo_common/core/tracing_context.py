"""Trace-context propagation through event payloads.

The sender injects the current span context into a ``dict[str, str]``
carrier that travels inside the event payload; the receiver extracts it and
parents its own spans to the sender's trace. The W3C ``traceparent`` format
is used unless the global propagator has been reconfigured.
"""

from collections.abc import Mapping, MutableMapping

from opentelemetry import propagate
from opentelemetry.context import Context


TRACE_CONTEXT_FIELD = "trace_context"


def inject_context(
    carrier: MutableMapping[str, str] | None = None,
) -> MutableMapping[str, str]:
    """Write the current trace context into ``carrier`` and return it.

    Use this before emitting an event so the receiver can continue the trace.
    """
    target: MutableMapping[str, str] = {} if carrier is None else carrier
    propagate.inject(target)
    return target


def extract_context(carrier: Mapping[str, str]) -> Context:
    """Read a parent trace context from ``carrier``.

    Use this when handling an incoming event to continue the sender's trace.
    """
    return propagate.extract(carrier)


def attach_to_payload(payload: dict) -> dict:
    """Return a copy of a JSON payload with the current trace context added.

    The carrier goes under ``trace_context``; receivers that do not trace
    ignore it like any other unknown field.
    """
    enriched = dict(payload)
    enriched[TRACE_CONTEXT_FIELD] = inject_context()
    return enriched


def context_from_payload(payload: Mapping) -> Context:
    """Extract the trace context carried by a received payload, if any."""
    carrier = payload.get(TRACE_CONTEXT_FIELD)
    if not isinstance(carrier, Mapping):
        carrier = {}
    return extract_context(carrier)
