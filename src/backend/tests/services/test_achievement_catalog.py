"""
Tests for the achievement catalog and definition validation.
"""

import pytest

from models.achievement import (
    CATEGORY_METRICS,
    AchievementCategory,
    AchievementDefinition,
    AchievementRarity,
    AchievementTier,
    StatMetric,
)
from services.achievement_catalog import build_catalog, get_catalog


def make_definition(**overrides) -> AchievementDefinition:
    data = {
        "id": "streak_3",
        "name": "Getting Started",
        "description": "Solve problems for 3 consecutive days",
        "icon": "flame",
        "category": AchievementCategory.STREAK,
        "tier": AchievementTier.BRONZE,
        "requirement": 3,
        "rarity": AchievementRarity.COMMON,
        "xp_reward": 50,
        "metric": StatMetric.CURRENT_STREAK,
    }
    data.update(overrides)
    return AchievementDefinition(**data)


@pytest.mark.unit
class TestCatalog:
    """Tests for the built-in catalog."""

    def test_ids_are_unique(self) -> None:
        ids = [d.id for d in get_catalog()]
        assert len(ids) == len(set(ids))

    def test_is_built_once(self) -> None:
        assert get_catalog() is get_catalog()

    def test_every_category_is_represented(self) -> None:
        categories = {d.category for d in get_catalog()}
        assert categories == set(AchievementCategory)

    def test_metrics_match_categories(self) -> None:
        for definition in get_catalog():
            assert definition.metric in CATEGORY_METRICS[definition.category], definition.id

    def test_streak_achievements_read_current_streak(self) -> None:
        streak_defs = [d for d in get_catalog() if d.category == AchievementCategory.STREAK]

        assert streak_defs
        assert all(d.metric == StatMetric.CURRENT_STREAK for d in streak_defs)

    def test_easy_enthusiast_definition(self) -> None:
        by_id = {d.id: d for d in get_catalog()}

        easy_50 = by_id["easy_master_50"]
        assert easy_50.requirement == 50
        assert easy_50.xp_reward == 150
        assert easy_50.metric == StatMetric.EASY_SOLVED

    def test_requirements_ascend_within_a_metric(self) -> None:
        """Tiers of the same metric are listed easiest first."""
        by_metric: dict[StatMetric, list[int]] = {}
        for definition in get_catalog():
            by_metric.setdefault(definition.metric, []).append(definition.requirement)

        for metric, requirements in by_metric.items():
            assert requirements == sorted(requirements), metric


@pytest.mark.unit
class TestBuildCatalog:
    """Tests for catalog construction."""

    def test_duplicate_ids_rejected(self) -> None:
        with pytest.raises(ValueError, match="Duplicate"):
            build_catalog([make_definition(), make_definition(name="Again")])

    def test_preserves_order(self) -> None:
        catalog = build_catalog([make_definition(id="b"), make_definition(id="a")])
        assert [d.id for d in catalog] == ["b", "a"]


@pytest.mark.unit
class TestDefinitionValidation:
    """Tests for AchievementDefinition invariants."""

    @pytest.mark.parametrize("requirement", [0, -1])
    def test_requirement_must_be_positive(self, requirement: int) -> None:
        with pytest.raises(ValueError):
            make_definition(requirement=requirement)

    def test_negative_xp_rejected(self) -> None:
        with pytest.raises(ValueError):
            make_definition(xp_reward=-10)

    def test_metric_must_belong_to_category(self) -> None:
        with pytest.raises(ValueError):
            make_definition(category=AchievementCategory.SOCIAL, metric=StatMetric.HARD_SOLVED)

    def test_definitions_are_immutable(self) -> None:
        definition = make_definition()
        with pytest.raises(AttributeError):
            definition.requirement = 1  # type: ignore[misc]
