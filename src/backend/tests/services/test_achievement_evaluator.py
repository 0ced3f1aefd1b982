"""
Tests for achievement evaluation.

Covers:
- Unlock threshold and progress clamping
- Metric dispatch per category
- XP/level aggregate
- Unlock times from recorded history
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from models.achievement import (
    AchievementCategory,
    AchievementDefinition,
    AchievementRarity,
    AchievementTier,
    StatMetric,
    UserStatsSnapshot,
)
from models.streak import StreakResult
from services.achievement_catalog import get_catalog
from services.achievement_evaluator import (
    XP_PER_LEVEL,
    compute_aggregate,
    evaluate_achievement,
    evaluate_achievements,
    level_for_xp,
    resolve_metric,
)

NOW = datetime(2025, 6, 12, 10, 0, tzinfo=timezone.utc)
NO_STREAK = StreakResult.empty()


def definition(
    achievement_id: str = "test_achievement",
    category: AchievementCategory = AchievementCategory.DIFFICULTY,
    metric: StatMetric = StatMetric.EASY_SOLVED,
    requirement: int = 50,
    xp_reward: int = 150,
) -> AchievementDefinition:
    return AchievementDefinition(
        id=achievement_id,
        name="Test",
        description="Test achievement",
        icon="star",
        category=category,
        tier=AchievementTier.BRONZE,
        requirement=requirement,
        rarity=AchievementRarity.COMMON,
        xp_reward=xp_reward,
        metric=metric,
    )


@pytest.mark.unit
class TestEvaluateAchievement:
    """Tests for single-achievement evaluation."""

    def test_exact_requirement_unlocks(self) -> None:
        progress = evaluate_achievement(definition(), UserStatsSnapshot(easy_solved=50), NO_STREAK, NOW)

        assert progress.is_unlocked is True
        assert progress.current_progress == 50
        assert progress.unlocked_at == NOW

    def test_below_requirement_stays_locked(self) -> None:
        progress = evaluate_achievement(definition(), UserStatsSnapshot(easy_solved=49), NO_STREAK, NOW)

        assert progress.is_unlocked is False
        assert progress.current_progress == 49
        assert progress.unlocked_at is None

    def test_progress_is_clamped_to_requirement(self) -> None:
        progress = evaluate_achievement(definition(), UserStatsSnapshot(easy_solved=400), NO_STREAK, NOW)

        assert progress.current_progress == 50
        assert progress.is_unlocked is True

    def test_negative_counter_is_clamped_to_zero(self) -> None:
        progress = evaluate_achievement(definition(), UserStatsSnapshot(easy_solved=-3), NO_STREAK, NOW)

        assert progress.current_progress == 0
        assert progress.is_unlocked is False

    def test_recorded_unlock_time_wins(self) -> None:
        first_seen = NOW - timedelta(days=30)

        progress = evaluate_achievement(
            definition(), UserStatsSnapshot(easy_solved=60), NO_STREAK, NOW, first_unlocked_at=first_seen
        )

        assert progress.unlocked_at == first_seen

    def test_recorded_unlock_time_ignored_when_locked(self) -> None:
        """A counter that dropped below the requirement reads as locked again."""
        progress = evaluate_achievement(
            definition(), UserStatsSnapshot(easy_solved=10), NO_STREAK, NOW, first_unlocked_at=NOW
        )

        assert progress.is_unlocked is False
        assert progress.unlocked_at is None

    def test_streak_achievement_reads_current_streak(self) -> None:
        streak_def = definition(
            category=AchievementCategory.STREAK,
            metric=StatMetric.CURRENT_STREAK,
            requirement=7,
            xp_reward=100,
        )

        progress = evaluate_achievement(streak_def, UserStatsSnapshot(), StreakResult(7, 12, date(2025, 6, 12)), NOW)

        assert progress.is_unlocked is True
        assert progress.current_progress == 7


@pytest.mark.unit
class TestResolveMetric:
    """Tests for metric dispatch."""

    @pytest.mark.parametrize(
        "metric,expected",
        [
            (StatMetric.CURRENT_STREAK, 4),
            (StatMetric.EASY_SOLVED, 11),
            (StatMetric.MEDIUM_SOLVED, 22),
            (StatMetric.HARD_SOLVED, 3),
            (StatMetric.PARTIES_CREATED, 2),
            (StatMetric.PARTIES_JOINED, 7),
            (StatMetric.TOTAL_SOLVED, 36),
        ],
    )
    def test_each_metric_reads_its_own_field(self, metric: StatMetric, expected: int) -> None:
        stats = UserStatsSnapshot(
            easy_solved=11,
            medium_solved=22,
            hard_solved=3,
            parties_created=2,
            parties_joined=7,
            total_solved=36,
        )
        streak = StreakResult(4, 10, date(2025, 6, 12))

        assert resolve_metric(metric, stats, streak) == expected


@pytest.mark.unit
class TestAggregate:
    """Tests for XP and level derivation."""

    @pytest.mark.parametrize(
        "xp,level",
        [(0, 1), (999, 1), (1000, 2), (1999, 2), (2500, 3), (10000, 11)],
    )
    def test_level_for_xp(self, xp: int, level: int) -> None:
        assert level_for_xp(xp) == level

    def test_only_unlocked_achievements_contribute(self) -> None:
        locked = evaluate_achievement(definition("a", xp_reward=500), UserStatsSnapshot(), NO_STREAK, NOW)
        unlocked = evaluate_achievement(
            definition("b", requirement=1, xp_reward=1200), UserStatsSnapshot(easy_solved=1), NO_STREAK, NOW
        )

        aggregate = compute_aggregate([locked, unlocked])

        assert aggregate.total_xp == 1200
        assert aggregate.level == 2
        assert aggregate.next_level_xp == 2 * XP_PER_LEVEL

    def test_empty_aggregate(self) -> None:
        aggregate = compute_aggregate([])

        assert aggregate.total_xp == 0
        assert aggregate.level == 1
        assert aggregate.next_level_xp == 1000


@pytest.mark.unit
class TestEvaluateAchievements:
    """Tests for evaluating the full catalog."""

    def test_new_user_has_nothing_unlocked(self) -> None:
        evaluation = evaluate_achievements(UserStatsSnapshot(), NO_STREAK, get_catalog(), NOW)

        assert evaluation.unlocked_ids == []
        assert evaluation.aggregate.total_xp == 0
        assert evaluation.aggregate.level == 1
        assert evaluation.aggregate.next_level_xp == 1000

    def test_result_follows_catalog_order(self) -> None:
        catalog = get_catalog()

        evaluation = evaluate_achievements(UserStatsSnapshot(total_solved=5), NO_STREAK, catalog, NOW)

        assert [a.definition.id for a in evaluation.achievements] == [d.id for d in catalog]

    def test_fifty_easy_solves_unlocks_easy_enthusiast(self) -> None:
        catalog = [definition("easy_master_50", requirement=50, xp_reward=150)]

        evaluation = evaluate_achievements(UserStatsSnapshot(easy_solved=50), NO_STREAK, catalog, NOW)

        assert evaluation.unlocked_ids == ["easy_master_50"]
        assert evaluation.aggregate.total_xp == 150

    def test_total_xp_matches_unlocked_rewards(self) -> None:
        catalog = get_catalog()
        stats = UserStatsSnapshot(
            easy_solved=60,
            medium_solved=12,
            hard_solved=5,
            parties_created=1,
            parties_joined=5,
            total_solved=77,
        )

        evaluation = evaluate_achievements(stats, StreakResult(8, 8, date(2025, 6, 12)), catalog, NOW)

        unlocked = {d.id: d.xp_reward for d in catalog if d.id in evaluation.unlocked_ids}
        assert set(unlocked) == {
            "streak_3",
            "streak_7",
            "easy_master_10",
            "easy_master_50",
            "medium_master_10",
            "hard_master_5",
            "party_creator",
            "social_butterfly",
            "first_solve",
            "dozen_problems",
            "half_century",
        }
        assert evaluation.aggregate.total_xp == sum(unlocked.values())
        assert evaluation.aggregate.level == evaluation.aggregate.total_xp // 1000 + 1
        assert evaluation.aggregate.next_level_xp == evaluation.aggregate.level * 1000

    def test_unlock_history_is_applied_per_id(self) -> None:
        catalog = [
            definition("first", requirement=1),
            definition("second", requirement=2),
        ]
        recorded = NOW - timedelta(days=3)

        evaluation = evaluate_achievements(
            UserStatsSnapshot(easy_solved=2), NO_STREAK, catalog, NOW, unlock_history={"first": recorded}
        )

        by_id = {a.definition.id: a for a in evaluation.achievements}
        assert by_id["first"].unlocked_at == recorded
        assert by_id["second"].unlocked_at == NOW
