"""
Candidate <-> job matching.

Weighted heuristic: 70% skill overlap, 30% experience ratio. Skills match
when either lower-cased string contains the other ("react" matches
"React Native").
"""

from __future__ import annotations

import math
from typing import Any, Iterable, Optional

SKILL_WEIGHT = 0.7
EXPERIENCE_WEIGHT = 0.3


def _normalize_skills(skills: Optional[Iterable[str]]) -> list[str]:
    return [skill.lower().strip() for skill in (skills or []) if skill and skill.strip()]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def find_matching_skills(candidate_skills: Iterable[str], job_skills: Iterable[str]) -> list[str]:
    """Return the candidate skills (lower-cased) that overlap any job skill."""
    normalized_job = _normalize_skills(job_skills)
    return [
        skill
        for skill in _normalize_skills(candidate_skills)
        if any(job_skill in skill or skill in job_skill for job_skill in normalized_job)
    ]


def skill_match_percentage(candidate_skills: Iterable[str], job_skills: Iterable[str]) -> float:
    normalized_job = _normalize_skills(job_skills)
    if not normalized_job:
        return 0.0
    matching = find_matching_skills(candidate_skills, normalized_job)
    return min(len(matching) / len(normalized_job) * 100, 100.0)


def experience_match_percentage(candidate_experience: float, experience_required: float) -> float:
    candidate_experience = candidate_experience or 0
    experience_required = experience_required or 0
    if candidate_experience >= experience_required:
        return 100.0
    return candidate_experience / experience_required * 100


def compute_match(
    candidate_skills: Iterable[str],
    candidate_experience: float,
    job_skills: Iterable[str],
    experience_required: float,
) -> dict[str, Any]:
    """
    Score one candidate against one job.

    Returns:
        Dict with ``match_percentage`` (0-100 int), ``skill_match``,
        ``experience_match`` and ``matching_skills``.
    """
    job_skills = list(job_skills or [])
    skill_match = skill_match_percentage(candidate_skills, job_skills)
    experience_match = experience_match_percentage(candidate_experience, experience_required)
    overall = _round_half_up(skill_match * SKILL_WEIGHT + experience_match * EXPERIENCE_WEIGHT)

    return {
        "match_percentage": overall,
        "skill_match": round(skill_match, 2),
        "experience_match": round(experience_match, 2),
        "matching_skills": find_matching_skills(candidate_skills, job_skills),
    }


def rank_candidates(
    candidates: Iterable[dict[str, Any]],
    job_skills: Iterable[str],
    experience_required: float,
    threshold: int = 20,
    limit: int = 10,
) -> list[dict[str, Any]]:
    """
    Rank candidate dicts (with ``skills`` and ``experience`` keys) for a job.

    Keeps candidates scoring strictly above ``threshold``, best first, at
    most ``limit`` of them. Ties keep input order.
    """
    job_skills = list(job_skills or [])
    scored = []
    for candidate in candidates:
        match = compute_match(
            candidate.get("skills") or [],
            candidate.get("experience") or 0,
            job_skills,
            experience_required,
        )
        scored.append(
            {
                **candidate,
                "match_percentage": match["match_percentage"],
                "matching_skills": match["matching_skills"],
            }
        )

    ranked = [item for item in scored if item["match_percentage"] > threshold]
    ranked.sort(key=lambda item: item["match_percentage"], reverse=True)
    return ranked[:limit]
