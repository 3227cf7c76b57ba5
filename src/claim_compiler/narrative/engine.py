"""Narrative engine: assembles the claim narrative from the module table."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from claim_compiler.models import ReadinessInput
from claim_compiler.narrative.models import MissingSlot, NarrativeModule, NarrativeResult, NarrativeTrace
from claim_compiler.narrative.modules import NARRATIVE_MODULES

log = logging.getLogger(__name__)


def generate_narrative(
    snapshot: ReadinessInput,
    modules: Sequence[NarrativeModule] = NARRATIVE_MODULES,
) -> NarrativeResult:
    """Run every applicable module in order and join their sentences.

    All-or-nothing: if any applicable module cannot resolve its inputs, the
    result carries only the missing slots and no text.
    """
    traces: list[NarrativeTrace] = []
    missing_slots: list[MissingSlot] = []

    for module in modules:
        if not module.applies_when(snapshot):
            continue

        resolved = module.resolve(snapshot)
        if resolved is None:
            missing_slots.extend(
                MissingSlot(
                    module_id=module.id,
                    required_input=slot,
                    label=f"Required rationale missing: {slot}",
                )
                for slot in module.required_slots
            )
            continue

        traces.append(
            NarrativeTrace(
                sentence=module.render(resolved),
                source_module_id=module.id,
                source_data_refs=resolved.refs,
            )
        )

    if missing_slots:
        log.debug(
            "narrative_blocked | modules=%s",
            ",".join(dict.fromkeys(s.module_id for s in missing_slots)),
        )
        return NarrativeResult(ok=False, missing_slots=tuple(missing_slots))

    log.debug("narrative | modules=%s", ",".join(t.source_module_id for t in traces))
    return NarrativeResult(
        ok=True,
        full_text=" ".join(t.sentence for t in traces),
        traces=tuple(traces),
    )
