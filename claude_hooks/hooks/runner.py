"""Run the hooks registered for one event.

Implements a single hook invocation end to end:
1. Read one JSON document from stdin and type it for the event
2. Run each handler in order, each with a fresh verdict
3. Merge the verdicts and resolve the exit code
4. Write the merged verdict to stdout (exit 0) or stderr (non-zero)

Bad input and handler exceptions never escape: they become a
``continue: false`` envelope on stderr with exit code 1.
"""

from __future__ import annotations

import importlib
import json
import sys
import traceback
from typing import IO, Any, Callable, Iterable, Mapping, Union

from ..config import ConfigLoader, HooksConfig
from ..output.exit_codes import error_resolution, resolve_exit
from ..output.merge import merge_verdicts
from ..output.registry import EventKind, coerce_kind
from ..output.verdict import Verdict
from ..utils.log import SessionLogger
from .handler import Hook
from .io import HookInputError, log_debug, parse_input, read_json_input, write_envelope
from .types import HookInput

HandlerResult = Union[Verdict, Mapping[str, Any], None]
Handler = Union[type[Hook], Callable[[HookInput], HandlerResult]]


class HandlerLoadError(Exception):
    """Raised when a ``module:attribute`` handler reference cannot be imported."""


def load_handler(ref: str) -> Handler:
    """Import a handler from a ``package.module:Name`` reference."""
    module_name, sep, attr = ref.partition(":")
    if not sep or not module_name or not attr:
        raise HandlerLoadError(f"Handler must look like 'package.module:Name', got {ref!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise HandlerLoadError(f"Cannot import {module_name}: {e}") from e
    try:
        handler = getattr(module, attr)
    except AttributeError:
        raise HandlerLoadError(f"{module_name} has no attribute {attr!r}") from None
    if not callable(handler):
        raise HandlerLoadError(f"{ref} is not callable")
    return handler


def handler_name(handler: Handler) -> str:
    return getattr(handler, "__qualname__", None) or type(handler).__name__


def invoke_handler(
    handler: Handler,
    hook_input: HookInput,
    input_data: Mapping[str, Any],
    config: HooksConfig,
) -> Verdict | None:
    """Run one handler to completion and return its verdict."""
    if isinstance(handler, type) and issubclass(handler, Hook):
        if handler.event is not hook_input.event:
            raise HookInputError(
                f"{handler.__name__} handles {handler.event.value}, not {hook_input.event.value}"
            )
        return handler(input_data, config).run()

    result = handler(hook_input)
    if result is None or isinstance(result, Verdict):
        return result
    if isinstance(result, Mapping):
        return Verdict.from_dict(hook_input.event, result)
    raise TypeError(f"{handler_name(handler)} returned {type(result).__name__}, expected a verdict")


def failure_envelope(reason: str) -> dict[str, Any]:
    return {"continue": False, "stopReason": reason, "suppressOutput": False}


def _fail(kind: EventKind | None, reason: str, stderr: IO[str] | None) -> int:
    print(json.dumps(failure_envelope(reason)), file=stderr or sys.stderr)
    return error_resolution(kind).code


def run_hooks(
    event: EventKind | str | None,
    handlers: Iterable[Handler],
    *,
    stdin: IO[str] | None = None,
    stdout: IO[str] | None = None,
    stderr: IO[str] | None = None,
    config: HooksConfig | None = None,
) -> int:
    """Run ``handlers`` against the input on stdin and write the merged verdict.

    Args:
        event: Event the handlers are registered for; taken from the input
            document when None
        handlers: Hook classes or callables, run in order
        stdin/stdout/stderr: Streams (default: the process streams)
        config: Effective configuration (default: loaded from disk/env)

    Returns:
        Process exit code
    """
    kind = coerce_kind(event) if event else None
    config = config or ConfigLoader().config

    try:
        data = read_json_input(stdin)
        hook_input = parse_input(data, kind)
    except HookInputError as e:
        log_debug(f"Hook input error: {e}", config.debug, stderr)
        return _fail(kind, f"Hook input error: {e}", stderr)

    kind = hook_input.event
    logger = SessionLogger(hook_input.session_id, "HookRunner", config.log_directory)
    log_debug(f"Received {kind.value} hook", config.debug, stderr)

    verdicts: list[Verdict | None] = []
    for handler in handlers:
        name = handler_name(handler)
        try:
            verdicts.append(invoke_handler(handler, hook_input, data, config))
        except Exception as e:
            logger.error(f"{name} execution error: {e}\n{traceback.format_exc()}")
            return _fail(kind, f"{name} execution error: {e}", stderr)

    try:
        merged = merge_verdicts(kind, verdicts)
        resolution = resolve_exit(merged, config.exit_policy)
        body = merged.to_json()
    except (TypeError, ValueError) as e:
        logger.error(f"Invalid {kind.value} verdict: {e}")
        return _fail(kind, f"Invalid {kind.value} verdict: {e}", stderr)

    write_envelope(body, resolution, stdout, stderr)
    logger.debug(f"{kind.value} finished with exit {resolution.code} ({len(verdicts)} handler(s))")
    return resolution.code
