"""
genui Kernel — Action Dispatcher

Maps action names to handlers. A handler receives the ActionEvent and the
current tree and returns an ActionResult describing the effect, or None when
it can't process the event (missing target, missing url). Handlers never
mutate the tree; state changes come back as patch results.

Built-ins:
  increment / decrement  counter text ± 1 as a replace patch
  submit_form            runtime field values → message payload
  navigate               sanitized url → external result

process_action_result turns a result into host side effects.
"""

from __future__ import annotations

import json
import logging
import re
import webbrowser
from collections.abc import Callable, Mapping
from typing import Any

from genui.config import settings
from genui.kernel.catalog import FORM_CONTROL_TYPES, SUBMIT_ACTION
from genui.kernel.types import (
    ActionEvent,
    ActionHandler,
    ActionResult,
    ActionResultCallbacks,
    ExternalResult,
    MessageResult,
    NoneResult,
    PatchResult,
    action_name,
    get_children,
    get_element,
    get_props,
)
from genui.kernel.url_policy import sanitize_url
from genui.kernel.values import RuntimeValueStore

logger = logging.getLogger(__name__)

ActionDispatch = Callable[[ActionEvent], None]

# Params that scope a submission; not forwarded in the payload.
SCOPE_PARAMS: frozenset[str] = frozenset({"formKey", "fieldKeys"})

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


# ---------------------------------------------------------------------------
# Counter
# ---------------------------------------------------------------------------


def _counter_key(event: ActionEvent, tree: dict[str, Any]) -> str:
    target = (event.params or {}).get("target")
    if isinstance(target, str) and get_element(tree, target) is not None:
        return target
    return settings.COUNTER_KEY


def _parse_leading_int(value: Any) -> int:
    """Leading integer of the counter text; 0 when there isn't one."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INT_RE.match(value)
        if match:
            return int(match.group(1))
    return 0


def _counter_patch(event: ActionEvent, tree: dict[str, Any], delta: int) -> ActionResult | None:
    key = _counter_key(event, tree)
    element = get_element(tree, key)
    if element is None:
        return None
    current = _parse_leading_int(get_props(element).get("children"))
    return PatchResult(
        patches=[
            {
                "op": "replace",
                "path": f"/elements/{key}/props/children",
                "value": str(current + delta),
            }
        ]
    )


def handle_increment(event: ActionEvent, tree: dict[str, Any]) -> ActionResult | None:
    return _counter_patch(event, tree, 1)


def handle_decrement(event: ActionEvent, tree: dict[str, Any]) -> ActionResult | None:
    return _counter_patch(event, tree, -1)


# ---------------------------------------------------------------------------
# submit_form
# ---------------------------------------------------------------------------


def _stable(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _stable(value[k]) for k in sorted(value)}
    if isinstance(value, list):
        return [_stable(v) for v in value]
    return value


def _descendants(tree: dict[str, Any], key: str) -> set[str]:
    found: set[str] = set()
    stack = list(get_children(get_element(tree, key)))
    while stack:
        child = stack.pop()
        if child in found:
            continue
        found.add(child)
        stack.extend(get_children(get_element(tree, child)))
    return found


def _is_field_like(tree: dict[str, Any], key: str) -> bool:
    element = get_element(tree, key)
    if element is None:
        return True
    return element.get("type") in FORM_CONTROL_TYPES


def _is_scoped(params: Mapping[str, Any] | None) -> bool:
    if not params:
        return False
    return isinstance(params.get("formKey"), str) or isinstance(params.get("fieldKeys"), list)


def _unscoped_submit_count(tree: dict[str, Any]) -> int:
    count = 0
    for element in (tree.get("elements") or {}).values():
        if not isinstance(element, dict) or action_name(element) != SUBMIT_ACTION:
            continue
        if not _is_scoped(element["action"].get("params")):
            count += 1
    return count


def handle_submit_form(event: ActionEvent, tree: dict[str, Any]) -> ActionResult | None:
    """
    Collect runtime field values into a message payload.

    Field scope, first match wins:
      params.formKey    values of descendants of that element
      params.fieldKeys  exactly those keys
      otherwise         every field-like runtime value

    Without an explicit scope and with several submit_form actions in the
    tree, we can't tell which form is meant: warn once and return none.
    Nothing to send (no forwarded params, no fields in scope) is none too.
    """
    params = dict(event.params or {})
    context = event.context or {}
    runtime_values = context.get("runtimeValues")
    values: dict[str, Any] = dict(runtime_values) if isinstance(runtime_values, dict) else {}

    if not params and not values:
        return NoneResult()

    form_key = params.get("formKey")
    field_keys = params.get("fieldKeys")
    if isinstance(form_key, str):
        scope = _descendants(tree, form_key)
        fields = {k: v for k, v in values.items() if k in scope}
    elif isinstance(field_keys, list):
        fields = {k: values[k] for k in field_keys if isinstance(k, str) and k in values}
    else:
        if _unscoped_submit_count(tree) > 1:
            logger.warning(
                "submit_form from %r is ambiguous: multiple unscoped submit_form actions in tree; "
                "set params.formKey or params.fieldKeys",
                event.source_key,
            )
            return NoneResult()
        fields = {k: v for k, v in values.items() if _is_field_like(tree, k)}

    forwarded = {k: v for k, v in params.items() if k not in SCOPE_PARAMS}
    if not forwarded and not fields:
        return NoneResult()

    payload = {
        "actionName": event.action_name,
        "sourceKey": event.source_key,
        "params": _stable(forwarded),
        "fields": _stable(fields),
    }
    content = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    return MessageResult(content=content, payload=payload)


# ---------------------------------------------------------------------------
# navigate
# ---------------------------------------------------------------------------


def handle_navigate(event: ActionEvent, tree: dict[str, Any]) -> ActionResult | None:
    params = event.params or {}
    url = params.get("url")
    if not isinstance(url, str) or not url:
        return None
    decision = sanitize_url(url)
    if not decision.ok:
        logger.warning("navigate from %r blocked (%s): %r", event.source_key, decision.reason, url)
        return None
    target = params.get("target")
    return ExternalResult(url=decision.url, target=target if isinstance(target, str) else None)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

BUILTIN_HANDLERS: Mapping[str, ActionHandler] = {
    "increment": handle_increment,
    "decrement": handle_decrement,
    "submit_form": handle_submit_form,
    "navigate": handle_navigate,
}


def create_handler_map(custom: Mapping[str, ActionHandler] | None = None) -> Mapping[str, ActionHandler]:
    """Built-ins merged with custom handlers; custom wins on name clashes."""
    if not custom:
        return BUILTIN_HANDLERS
    return {**BUILTIN_HANDLERS, **custom}


def dispatch_action(
    handlers: Mapping[str, ActionHandler],
    event: ActionEvent,
    tree: dict[str, Any],
    store: RuntimeValueStore | None = None,
) -> ActionResult | None:
    """
    Run the handler registered for event.action_name.

    Returns None when no handler is registered or the handler declines.
    With a store, touched runtime values are added to the event context
    unless the caller already supplied them.
    """
    handler = handlers.get(event.action_name)
    if handler is None:
        logger.debug("dispatch_action: no handler for %r", event.action_name)
        return None
    if store is not None and "runtimeValues" not in (event.context or {}):
        event = ActionEvent(
            action_name=event.action_name,
            source_key=event.source_key,
            params=event.params,
            context={**(event.context or {}), "runtimeValues": store.snapshot_touched()},
        )
    return handler(event, tree)


# ---------------------------------------------------------------------------
# Handler factories (renderer wiring)
# ---------------------------------------------------------------------------


def _event_for(action: Mapping[str, Any], source_key: str, context: dict[str, Any] | None = None) -> ActionEvent:
    params = action.get("params")
    return ActionEvent(
        action_name=action["name"],
        source_key=source_key,
        params=dict(params) if isinstance(params, dict) else None,
        context=context,
    )


def create_action_handler(
    action: Mapping[str, Any], source_key: str, dispatch: ActionDispatch
) -> Callable[[dict[str, Any] | None], None]:
    """Handler for value-change actions; the control passes its context."""

    def handler(context: dict[str, Any] | None = None) -> None:
        dispatch(_event_for(action, source_key, context))

    return handler


def create_click_handler(
    action: Mapping[str, Any],
    source_key: str,
    dispatch: ActionDispatch,
    existing_on_click: Callable[..., Any] | None = None,
) -> Callable[..., None]:
    """Click handler that runs an existing onClick first, then dispatches."""

    def handler(*args: Any) -> None:
        if callable(existing_on_click):
            existing_on_click(*args)
        dispatch(_event_for(action, source_key))

    return handler


def create_submit_handler(
    action: Mapping[str, Any],
    source_key: str,
    dispatch: ActionDispatch,
    store: RuntimeValueStore,
) -> Callable[..., None]:
    """Click handler for submit buttons: attaches the touched runtime values."""

    def handler(*args: Any) -> None:
        dispatch(_event_for(action, source_key, {"runtimeValues": store.snapshot_touched()}))

    return handler


# ---------------------------------------------------------------------------
# Result processing
# ---------------------------------------------------------------------------


def default_open_external(url: str, target: str) -> None:
    webbrowser.open(url, new=2 if target == "_blank" else 0)


def process_action_result(result: ActionResult | None, callbacks: ActionResultCallbacks) -> None:
    """
    Route a result to the host.

      patch     → apply_patches(patches)
      message   → send_message(content, payload)
      external  → open_external(url, target or "_blank"), after a URL check
      none      → nothing
    """
    if result is None or isinstance(result, NoneResult):
        return
    if isinstance(result, PatchResult):
        callbacks.apply_patches(result.patches)
    elif isinstance(result, MessageResult):
        callbacks.send_message(result.content, result.payload)
    elif isinstance(result, ExternalResult):
        decision = sanitize_url(result.url)
        if not decision.ok:
            logger.warning("Blocked external URL (%s): %r", decision.reason, result.url)
            return
        opener = callbacks.open_external or default_open_external
        opener(decision.url, result.target or "_blank")
