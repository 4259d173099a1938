"""Hook output model: verdicts, merging and exit codes."""

from .errors import VerdictError, VerdictKindMismatch
from .registry import (
    EVENT_SPECS,
    Decision,
    EventKind,
    EventSpec,
    PermissionDecision,
    spec_for,
)
from .verdict import Verdict
from .model import HookOutput
from .merge import merge_verdicts
from .exit_codes import ExitPolicy, ExitResolution, Stream, error_resolution, resolve_exit

__all__ = [
    "VerdictError",
    "VerdictKindMismatch",
    "EVENT_SPECS",
    "Decision",
    "EventKind",
    "EventSpec",
    "PermissionDecision",
    "spec_for",
    "Verdict",
    "HookOutput",
    "merge_verdicts",
    "ExitPolicy",
    "ExitResolution",
    "Stream",
    "error_resolution",
    "resolve_exit",
]
