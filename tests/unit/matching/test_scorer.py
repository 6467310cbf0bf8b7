"""Unit tests for the MatchScorer."""

from __future__ import annotations

import pytest


def _student(**kwargs):
    from career_match.matching.models import StudentProfile

    return StudentProfile(**kwargs)


def _job(**kwargs):
    from career_match.matching.models import JobRequirements

    return JobRequirements(**kwargs)


class TestScoreEducation:
    """Test education scoring."""

    def test_no_education_requirement_returns_full_score(self, matching_config):
        """No requirement should score 100 and match."""
        from career_match.matching.scorer import MatchScorer

        sub = MatchScorer(config=matching_config).score_education(_student(), _job())

        assert sub.score == 100.0
        assert sub.matched is True

    def test_higher_education_meets_requirement(self, matching_config):
        """A higher level should satisfy a lower requirement."""
        from career_match.matching.scorer import MatchScorer

        sub = MatchScorer(config=matching_config).score_education(
            _student(education_level="master"), _job(education="bachelor")
        )

        assert sub.score == 100.0
        assert sub.matched is True

    def test_lower_education_scores_proportionally(self, matching_config):
        """A lower level should score student/job rank."""
        from career_match.matching.scorer import MatchScorer

        sub = MatchScorer(config=matching_config).score_education(
            _student(education_level="bachelor"), _job(education="master")
        )

        assert sub.score == pytest.approx(75.0)
        assert sub.matched is False

    def test_high_school_requirement_is_met_by_anyone(self, matching_config):
        """A rank-zero requirement should be met even without education."""
        from career_match.matching.scorer import MatchScorer

        sub = MatchScorer(config=matching_config).score_education(
            _student(), _job(education="high school")
        )

        assert sub.score == 100.0
        assert sub.matched is True


class TestScoreSkills:
    """Test skills scoring."""

    def test_empty_required_skills_returns_full_score(self, matching_config):
        """No required skills should score exactly 100 regardless of the student."""
        from career_match.matching.scorer import MatchScorer

        scorer = MatchScorer(config=matching_config)

        for skills in ([], ["cobol"], ["python", "sql"]):
            sub = scorer.score_skills(_student(skills=skills), _job(skills=[]))
            assert sub.score == 100.0
            assert sub.matched is True

    def test_substring_match_is_case_insensitive(self, matching_config):
        """'Java' should match a student's 'java developer'."""
        from career_match.matching.scorer import MatchScorer

        sub = MatchScorer(config=matching_config).score_skills(
            _student(skills=["java developer"]), _job(skills=["Java"])
        )

        assert sub.score == 100.0
        assert sub.matched is True
        assert sub.matched_skills == ("Java",)

    def test_half_of_required_skills_counts_as_matched(self, matching_config):
        """A 50% skills score should set the matched flag."""
        from career_match.matching.scorer import MatchScorer

        sub = MatchScorer(config=matching_config).score_skills(
            _student(skills=["Python"]), _job(skills=["python", "kubernetes"])
        )

        assert sub.score == 50.0
        assert sub.matched is True
        assert sub.missing_skills == ("kubernetes",)

    def test_below_half_of_required_skills_is_not_matched(self, matching_config):
        """Under 50% should not set the matched flag."""
        from career_match.matching.scorer import MatchScorer

        sub = MatchScorer(config=matching_config).score_skills(
            _student(skills=["Python"]), _job(skills=["python", "go", "rust"])
        )

        assert sub.score == pytest.approx(100 / 3)
        assert sub.matched is False


    def test_blank_student_skill_matches_nothing(self, matching_config):
        """An empty skill label should not satisfy any requirement."""
        from career_match.matching.scorer import MatchScorer

        sub = MatchScorer(config=matching_config).score_skills(
            _student(skills=["", "  "]), _job(skills=["Python", "SQL"])
        )

        assert sub.score == 0.0
        assert sub.missing_skills == ("Python", "SQL")

class TestScoreExperience:
    """Test experience scoring."""

    def test_no_experience_requirement_returns_full_score(self, matching_config):
        """No requirement should score 100 even with zero experience."""
        from career_match.matching.scorer import MatchScorer

        sub = MatchScorer(config=matching_config).score_experience(
            _student(experience_years=0), _job()
        )

        assert sub.score == 100.0
        assert sub.matched is True

    def test_range_binds_on_minimum(self, matching_config):
        """'2-4 years' should be met by two years."""
        from career_match.matching.scorer import MatchScorer

        sub = MatchScorer(config=matching_config).score_experience(
            _student(experience_years=2), _job(experience="2-4 years")
        )

        assert sub.score == 100.0
        assert sub.matched is True

    def test_shortfall_scores_proportionally(self, matching_config):
        """Less experience should score years/minimum."""
        from career_match.matching.scorer import MatchScorer

        sub = MatchScorer(config=matching_config).score_experience(
            _student(experience_years=1), _job(experience="4 years")
        )

        assert sub.score == 25.0
        assert sub.matched is False

    def test_zero_year_requirement_is_met_without_division(self, matching_config):
        """A zero or number-free requirement should be met by anyone."""
        from career_match.matching.scorer import MatchScorer

        scorer = MatchScorer(config=matching_config)

        for requirement in ("0 years", "some experience"):
            sub = scorer.score_experience(
                _student(experience_years=0), _job(experience=requirement)
            )
            assert sub.score == 100.0
            assert sub.matched is True


class TestScoreAcademic:
    """Test academic performance scoring."""

    def test_no_verified_gpa_returns_base_score(self, matching_config):
        """Without verified GPAs the sub-score should be exactly 50."""
        from career_match.matching.models import Transcript
        from career_match.matching.scorer import MatchScorer

        scorer = MatchScorer(config=matching_config)

        for transcripts in (
            [],
            [Transcript(gpa=3.9, verified=False)],
            [Transcript(gpa=None, verified=True)],
        ):
            sub = scorer.score_academic(transcripts)
            assert sub.score == 50.0
            assert sub.matched is False

    @pytest.mark.parametrize(
        ("gpa", "expected_score", "expected_matched"),
        [
            (4.0, 100.0, True),
            (3.5, 100.0, True),
            (3.0, 80.0, True),
            (2.5, 60.0, True),
            (2.49, 40.0, False),
            (0.0, 40.0, False),
        ],
    )
    def test_gpa_tiers(self, matching_config, gpa, expected_score, expected_matched):
        """GPA should map onto the tiered sub-scores."""
        from career_match.matching.models import Transcript
        from career_match.matching.scorer import MatchScorer

        sub = MatchScorer(config=matching_config).score_academic(
            [Transcript(gpa=gpa, verified=True)]
        )

        assert sub.score == expected_score
        assert sub.matched is expected_matched

    def test_gpa_from_courses_is_opt_in(self, matching_config):
        """Course grades should only count when the configuration allows it."""
        from career_match.matching.config import MatchingConfig
        from career_match.matching.models import Transcript
        from career_match.matching.scorer import MatchScorer

        transcripts = [
            Transcript.model_validate(
                {"verified": True, "courses": [{"name": "Statistics", "grade": "A"}]}
            )
        ]
        config = MatchingConfig(
            _env_file=None,  # type: ignore[call-arg]
            gpa_from_courses=True,
        )

        assert MatchScorer(config=matching_config).score_academic(
            transcripts
        ).score == 50.0
        assert MatchScorer(config=config).score_academic(transcripts).score == 100.0

    def test_average_uses_only_verified_transcripts(self, matching_config):
        """Unverified transcripts should not drag the average."""
        from career_match.matching.models import Transcript
        from career_match.matching.scorer import MatchScorer

        sub = MatchScorer(config=matching_config).score_academic(
            [
                Transcript(gpa=3.6, verified=True),
                Transcript(gpa=1.0, verified=False),
            ]
        )

        assert sub.score == 100.0


class TestScore:
    """Test the weighted total."""

    def test_score_combines_weighted_dimensions(self, matching_config):
        """The total should be the weighted sum of the sub-scores."""
        from career_match.matching.models import Transcript
        from career_match.matching.scorer import MatchScorer

        result = MatchScorer(config=matching_config).score(
            _student(
                education_level="bachelor", skills=["Python", "SQL"], experience_years=1
            ),
            [Transcript(gpa=3.2, verified=True)],
            _job(
                education="master",
                skills=["python", "sql", "docker", "aws"],
                experience="2-4 years",
            ),
        )

        # 0.3*75 + 0.3*50 + 0.2*50 + 0.2*80
        assert result.score == 63.5
        assert result.matched_criteria == ("skills", "academic_performance")
        assert result.missing_criteria == ("education", "experience")
        assert set(result.breakdown) == {
            "education",
            "skills",
            "experience",
            "academic_performance",
        }

    def test_score_rounds_to_two_decimals(self, matching_config):
        """The total should be rounded to two decimals."""
        from career_match.matching.scorer import MatchScorer

        result = MatchScorer(config=matching_config).score(
            _student(experience_years=1), [], _job(experience="3 years")
        )

        # 30 + 30 + 0.2*33.33.. + 0.2*50
        assert result.score == 76.67

    def test_skill_match_without_transcripts(self, matching_config):
        """Substring skills match plus no transcripts should give 100 and 50."""
        from career_match.matching.scorer import MatchScorer

        result = MatchScorer(config=matching_config).score(
            _student(skills=["java developer"]), [], _job(skills=["Java"])
        )

        assert result.breakdown["skills"].score == 100.0
        assert result.breakdown["skills"].matched is True
        assert result.breakdown["academic_performance"].score == 50.0
        assert result.score == 90.0

    def test_perfect_match_scores_one_hundred(self, matching_config):
        """Every dimension at 100 should give exactly 100."""
        from career_match.matching.models import Transcript
        from career_match.matching.scorer import MatchScorer

        result = MatchScorer(config=matching_config).score(
            _student(education_level="phd", skills=["python"], experience_years=10),
            [Transcript(gpa=3.9, verified=True)],
            _job(education="master", skills=["Python"], experience="5 years"),
        )

        assert result.score == 100.0
        assert result.missing_criteria == ()

    def test_score_stays_within_bounds_for_weakest_candidate(self, matching_config):
        """A student missing everything should still score within [0, 100]."""
        from career_match.matching.scorer import MatchScorer

        result = MatchScorer(config=matching_config).score(
            _student(),
            None,
            _job(education="phd", skills=["rust"], experience="10 years"),
        )

        assert 0.0 <= result.score <= 100.0
        assert result.score == 10.0

    def test_legacy_equal_weighting_is_configurable(self):
        """Equal weights should reproduce the legacy 25/25/25/25 scheme."""
        from career_match.matching.config import MatchingConfig
        from career_match.matching.models import Transcript
        from career_match.matching.scorer import MatchScorer

        config = MatchingConfig(
            _env_file=None,  # type: ignore[call-arg]
            weight_education=0.25,
            weight_skills=0.25,
            weight_experience=0.25,
            weight_academic=0.25,
        )

        result = MatchScorer(config=config).score(
            _student(
                education_level="bachelor", skills=["Python", "SQL"], experience_years=1
            ),
            [Transcript(gpa=3.2, verified=True)],
            _job(
                education="master",
                skills=["python", "sql", "docker", "aws"],
                experience="2-4 years",
            ),
        )

        assert result.score == 63.75

    def test_score_is_idempotent(self, matching_config):
        """Scoring twice should give identical results."""
        from career_match.matching.models import Transcript
        from career_match.matching.scorer import MatchScorer

        scorer = MatchScorer(config=matching_config)
        student = _student(education_level="diploma", skills=["excel"])
        transcripts = [Transcript(gpa=2.7, verified=True)]
        job = _job(education="bachelor", skills=["Excel", "SQL"], experience="1 year")

        assert scorer.score(student, transcripts, job) == scorer.score(
            student, transcripts, job
        )

    def test_missing_student_or_job_is_a_programming_error(self, matching_config):
        """None student or job should raise ValueError."""
        from career_match.matching.scorer import MatchScorer

        scorer = MatchScorer(config=matching_config)

        with pytest.raises(ValueError):
            scorer.score(None, [], _job())  # type: ignore[arg-type]
        with pytest.raises(ValueError):
            scorer.score(_student(), [], None)  # type: ignore[arg-type]
