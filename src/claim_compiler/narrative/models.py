"""Narrative data models: module definitions, traces, and the result."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Optional

from pydantic import BaseModel

from claim_compiler.models import ReadinessInput


@dataclass(frozen=True)
class ResolvedVars:
    """Template variables a module resolved, plus the data they came from."""

    vars: Mapping[str, str] = field(default_factory=dict)
    refs: tuple[str, ...] = ()


@dataclass(frozen=True)
class NarrativeModule:
    """A single rule that may contribute one sentence to the narrative.

    ``resolve`` returns ``None`` when the data the module needs is absent;
    every name in ``required_slots`` is then reported as missing.
    """

    id: str
    applies_when: Callable[[ReadinessInput], bool]
    required_slots: tuple[str, ...]
    resolve: Callable[[ReadinessInput], Optional[ResolvedVars]]
    template: str

    def render(self, resolved: ResolvedVars) -> str:
        sentence = self.template
        for key, value in resolved.vars.items():
            sentence = sentence.replace(f"{{{key}}}", value)
        return sentence


class NarrativeTrace(BaseModel):
    """One emitted sentence and the module/data that produced it."""

    model_config = {"frozen": True}

    sentence: str
    source_module_id: str
    source_data_refs: tuple[str, ...] = ()


class MissingSlot(BaseModel):
    """A required narrative input that could not be resolved."""

    model_config = {"frozen": True}

    module_id: str
    required_input: str
    label: str


class NarrativeResult(BaseModel):
    """Either the full narrative with traces, or the slots blocking it."""

    model_config = {"frozen": True}

    ok: bool
    full_text: Optional[str] = None
    traces: Optional[tuple[NarrativeTrace, ...]] = None
    missing_slots: Optional[tuple[MissingSlot, ...]] = None
