"""The verdict record returned by every hook.

One dataclass serves all event kinds; ``kind`` tags it and the
kind-specific part lives in ``specific`` (serialized as
``hookSpecificOutput``, with ``hookEventName`` added on the way out).
"""

from __future__ import annotations

import json
from copy import deepcopy
from dataclasses import dataclass
from typing import Any, Mapping

from .errors import VerdictError
from .registry import EVENT_SPECS, Decision, EventKind, coerce_kind

HOOK_SPECIFIC_KEY = "hookSpecificOutput"
EVENT_NAME_KEY = "hookEventName"


def _coerce_decision(value: object) -> Decision | None:
    if value is None or isinstance(value, Decision):
        return value
    try:
        return Decision(value)
    except ValueError:
        raise VerdictError(f"Unknown decision: {value!r}") from None


@dataclass(slots=True)
class Verdict:
    """Decision produced by a hook for one event.

    A handler gets a fresh instance with defaults and mutates it while it
    runs. Once returned it is only read: merging builds a new verdict.
    """
    kind: EventKind
    continue_: bool = True
    stop_reason: str = ""
    suppress_output: bool = False
    decision: Decision | None = None
    reason: str | None = None
    specific: dict[str, Any] | None = None

    def __setattr__(self, name: str, value: Any) -> None:
        # Wire values ("block", "Stop") are coerced on every assignment.
        if name == "kind":
            value = coerce_kind(value)
        elif name == "decision":
            value = _coerce_decision(value)
        object.__setattr__(self, name, value)

    # === Payload helpers ===

    def payload_value(self, key: str, default: Any = None) -> Any:
        if not self.specific:
            return default
        return self.specific.get(key, default)

    def set_payload(self, **values: Any) -> None:
        """Replace the hook-specific payload with ``values``.

        Raises:
            VerdictError: If a key is not part of this event's payload
        """
        allowed = EVENT_SPECS[self.kind].payload_fields
        unknown = [key for key in values if key not in allowed]
        if unknown:
            raise VerdictError(f"{self.kind.value} output has no field(s): {', '.join(unknown)}")
        self.specific = dict(values)

    def copy(self) -> Verdict:
        return Verdict(
            kind=self.kind,
            continue_=self.continue_,
            stop_reason=self.stop_reason,
            suppress_output=self.suppress_output,
            decision=self.decision,
            reason=self.reason,
            specific=deepcopy(self.specific),
        )

    # === Serialization ===

    def to_dict(self) -> dict[str, Any]:
        """Build the JSON envelope the agent reads."""
        data: dict[str, Any] = {
            "continue": self.continue_,
            "stopReason": self.stop_reason,
            "suppressOutput": self.suppress_output,
        }
        if self.decision is not None:
            data["decision"] = self.decision.value
        if self.reason is not None:
            data["reason"] = self.reason
        if self.specific is not None:
            data[HOOK_SPECIFIC_KEY] = {EVENT_NAME_KEY: self.kind.value, **self.specific}
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, kind: EventKind | str, data: Mapping[str, Any]) -> Verdict:
        """Parse an output envelope for ``kind``.

        Args:
            kind: Event the envelope was produced for
            data: Decoded JSON object

        Returns:
            Verdict tagged with ``kind``

        Raises:
            VerdictError: If a field has the wrong type or the payload is
                tagged with another event
        """
        kind = coerce_kind(kind)
        if not isinstance(data, Mapping):
            raise VerdictError("Hook output must be a JSON object")

        continue_ = data.get("continue", True)
        suppress = data.get("suppressOutput", False)
        if not isinstance(continue_, bool) or not isinstance(suppress, bool):
            raise VerdictError("'continue' and 'suppressOutput' must be booleans")

        stop_reason = data.get("stopReason") or ""
        reason = data.get("reason")
        if not isinstance(stop_reason, str) or not (reason is None or isinstance(reason, str)):
            raise VerdictError("'stopReason' and 'reason' must be strings")

        specific: dict[str, Any] | None = None
        raw_specific = data.get(HOOK_SPECIFIC_KEY)
        if raw_specific is not None:
            if not isinstance(raw_specific, Mapping):
                raise VerdictError(f"'{HOOK_SPECIFIC_KEY}' must be an object")
            tag = raw_specific.get(EVENT_NAME_KEY)
            if tag is not None and tag != kind.value:
                raise VerdictError(
                    f"{HOOK_SPECIFIC_KEY} is tagged {tag!r} but the verdict is for {kind.value}"
                )
            specific = {k: deepcopy(v) for k, v in raw_specific.items() if k != EVENT_NAME_KEY}

        return cls(
            kind=kind,
            continue_=continue_,
            stop_reason=stop_reason,
            suppress_output=suppress,
            decision=_coerce_decision(data.get("decision")),
            reason=reason,
            specific=specific,
        )

    @classmethod
    def from_json(cls, kind: EventKind | str, raw: str) -> Verdict:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise VerdictError(f"Invalid JSON: {e}") from e
        return cls.from_dict(kind, data)
