"""Milestone scheduler.

Groups scope modules into six fixed phases and lays them out week by week
across the engagement. Each phase depends on the one before it.
"""

from typing import List, Sequence, Tuple

from contracts import Milestone


FIRST_PHASE_WEEKS = 2
MAX_PHASES = 6


def phase_groups(modules: Sequence[str]) -> List[Tuple[str, List[str]]]:
    """Return ``(phase title, modules)`` for the six phases, in order.

    The last two phases are synthetic and never draw from ``modules``.
    """
    modules = list(modules)
    return [
        ("Discovery & Planning", modules[0:1]),
        ("Design & Architecture", modules[1:3]),
        ("Development Phase 1", modules[3:5]),
        ("Development Phase 2", modules[5:7]),
        ("Testing & QA", ["Quality Assurance", "User Acceptance Testing"]),
        ("Launch & Handoff", ["Deployment", "Training", "Documentation"]),
    ]


def weeks_per_phase(module_count: int, timeline_weeks: int) -> int:
    """Duration of every phase after the first.

    ``floor(timeline / min(module_count, 6))``, with the divisor floored at 1
    and the result floored at 1 week.
    """
    divisor = max(min(module_count, MAX_PHASES), 1)
    return max(timeline_weeks // divisor, 1)


def schedule(modules: Sequence[str], timeline_weeks: int) -> List[Milestone]:
    """Allocate phases across ``timeline_weeks``.

    Args:
        modules: Scope modules in delivery order
        timeline_weeks: Engagement length in weeks (> 0)

    Returns:
        Contiguous milestones, at most six. Phases that would start after the
        last week are dropped; the last materialized phase is clipped to
        ``timeline_weeks``.
    """
    if timeline_weeks < 1:
        raise ValueError(f"timeline_weeks must be positive, got {timeline_weeks}")

    per_phase = weeks_per_phase(len(modules), timeline_weeks)
    milestones: List[Milestone] = []
    current_week = 1

    for i, (title, _group) in enumerate(phase_groups(modules)):
        if current_week > timeline_weeks:
            break
        duration = FIRST_PHASE_WEEKS if i == 0 else per_phase
        end_week = min(current_week + duration - 1, timeline_weeks)
        milestones.append(
            Milestone(
                id=f"m{i + 1}",
                title=title,
                start_week=current_week,
                end_week=end_week,
                dependencies=[f"m{i}"] if i > 0 else [],
            )
        )
        current_week = end_week + 1

    return milestones
