from hirehub.services.matching import compute_match, find_matching_skills, rank_candidates


def test_weighted_example():
    match = compute_match(["react", "python"], 2, ["React", "Node.js"], 4)
    assert match["skill_match"] == 50
    assert match["experience_match"] == 50
    assert match["match_percentage"] == 50
    assert match["matching_skills"] == ["react"]


def test_substring_match_works_both_ways():
    assert find_matching_skills(["React Native", "js"], ["react", "Node.js"]) == ["react native", "js"]


def test_experience_capped_at_full_score():
    match = compute_match(["python"], 10, ["Python"], 3)
    assert match["experience_match"] == 100
    assert match["match_percentage"] == 100


def test_no_required_skills_scores_experience_only():
    match = compute_match(["python"], 5, [], 0)
    assert match["skill_match"] == 0
    assert match["match_percentage"] == 30


def test_skill_match_never_exceeds_full_score():
    match = compute_match(["react", "react native", "reactjs"], 1, ["React"], 1)
    assert match["skill_match"] == 100


def test_rounds_to_nearest_integer():
    # 1/3 skills -> 33.33 * 0.7 = 23.33; 1.5/3 years -> 50 * 0.3 = 15 => 38.33
    assert compute_match(["go"], 1.5, ["Go", "Rust", "C"], 3)["match_percentage"] == 38


def test_rank_filters_sorts_and_limits():
    candidates = [
        {"id": i, "skills": ["react"] if i % 2 else ["cobol"], "experience": i}
        for i in range(1, 25)
    ]
    ranked = rank_candidates(candidates, ["React", "Node.js"], 4, threshold=20, limit=10)

    assert len(ranked) == 10
    scores = [item["match_percentage"] for item in ranked]
    assert scores == sorted(scores, reverse=True)
    assert all(score > 20 for score in scores)


def test_rank_excludes_threshold_exactly():
    # no skills, experience 2/3 of required -> 20 exactly
    ranked = rank_candidates([{"id": 1, "skills": [], "experience": 2}], ["Go"], 3)
    assert ranked == []
