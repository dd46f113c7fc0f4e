from __future__ import annotations

import re
from typing import List

from core.models import Resource, ResourceAssignment, Task
from core.services.forecasting.horizon import overlaps, round_half_up
from core.services.forecasting.models import SkillMatch

STOP_WORDS = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
        "of", "with", "by", "from", "is", "are", "was", "were", "be", "been",
        "has", "have", "had", "do", "does", "did", "will", "would", "could",
        "should", "may", "might", "can", "shall", "this", "that", "these",
        "those", "it", "its", "all", "each", "every", "both", "few", "more",
        "most", "other", "some", "such", "no", "not", "only", "own", "same",
    }
)
MIN_KEYWORD_LENGTH = 3

_TOKEN_SPLIT = re.compile(r"[^a-z0-9]+")


def extract_keywords(text: str) -> List[str]:
    tokens = _TOKEN_SPLIT.split((text or "").lower())
    return [
        token
        for token in tokens
        if len(token) >= MIN_KEYWORD_LENGTH and token not in STOP_WORDS
    ]


def task_text(task: Task) -> str:
    return f"{task.name} {task.description or ''}".lower()


def skill_matches(skill: str, text: str, text_keywords: List[str]) -> bool:
    """Bidirectional substring test between one skill and the task text."""
    skill_lower = skill.lower()
    if any(word in text for word in extract_keywords(skill_lower)):
        return True
    return any(keyword in skill_lower for keyword in text_keywords)


def allocated_during_task(task: Task, assignments: List[ResourceAssignment]) -> float:
    # Undated tasks report full nominal capacity; existing load is not considered.
    if task.start_date is None or task.end_date is None:
        return 0.0
    return sum(
        float(a.hours_per_week)
        for a in assignments
        if overlaps(a.start_date, a.end_date, task.start_date, task.end_date)
    )


def score_resource(
    task: Task,
    resource: Resource,
    assignments: List[ResourceAssignment],
) -> SkillMatch:
    text = task_text(task)
    keywords = extract_keywords(text)

    skills = list(resource.skills or [])
    matched = [skill for skill in skills if skill_matches(skill, text, keywords)]
    score = round_half_up(100.0 * len(matched) / len(skills)) if skills else 0

    own = [a for a in assignments if a.resource_id == resource.id]
    capacity = float(resource.capacity_hours_per_week or 0.0)
    available = max(0.0, capacity - allocated_during_task(task, own))

    return SkillMatch(
        resource_id=resource.id,
        resource_name=resource.name,
        match_score=score,
        matched_skills=matched,
        available_capacity=available,
    )


def rank_resources_for_task(
    task: Task,
    resources: List[Resource],
    assignments: List[ResourceAssignment],
) -> List[SkillMatch]:
    matches = [
        score_resource(task, resource, assignments)
        for resource in resources
        if resource.is_active
    ]
    matches.sort(key=lambda m: (-m.match_score, -m.available_capacity))
    return matches


__all__ = [
    "STOP_WORDS",
    "MIN_KEYWORD_LENGTH",
    "extract_keywords",
    "task_text",
    "skill_matches",
    "allocated_during_task",
    "score_resource",
    "rank_resources_for_task",
]
