"""MessageGenerator测试"""

import random

import pytest

from iris_care.care.message_generator import MessageGenerator
from iris_care.care.message_templates import MESSAGE_TEMPLATES
from iris_care.core.types import CareTone, CareType
from iris_care.models.care import CareOpportunity, CareSuggestion, CareTrigger


def make_opportunity(care_type=CareType.LOW_MOOD, action="rest_suggestion"):
    return CareOpportunity(
        type=care_type,
        priority=5,
        trigger=CareTrigger("test", 1.0, 0.5),
        suggestion=CareSuggestion("title", "message", action=action),
    )


class TestTemplates:

    @pytest.mark.parametrize("care_type", list(CareType))
    def test_every_type_has_variants(self, care_type):
        assert len(MESSAGE_TEMPLATES[care_type]) >= 2


class TestGenerate:

    def test_picks_template_and_keeps_action(self):
        generator = MessageGenerator(rng=random.Random(1))
        message = generator.generate(make_opportunity())

        assert message.message in [t.message for t in MESSAGE_TEMPLATES[CareType.LOW_MOOD]]
        assert message.action == "rest_suggestion"

    def test_same_seed_same_choice(self):
        first = MessageGenerator(rng=random.Random(7)).generate(make_opportunity(CareType.HIGH_STRESS))
        second = MessageGenerator(rng=random.Random(7)).generate(make_opportunity(CareType.HIGH_STRESS))
        assert first == second

    def test_fallback_without_templates(self):
        generator = MessageGenerator(templates={}, rng=random.Random(0))
        message = generator.generate(make_opportunity(action=None))

        assert message.title == "关怀"
        assert message.message == "我在这里陪着你"
        assert message.tone == CareTone.GENTLE
        assert message.action is None


class TestPreferences:

    def test_learn_preference_averages(self):
        generator = MessageGenerator()
        assert generator.learn_preference("low_mood_1", 4.0) == pytest.approx(2.0)
        assert generator.learn_preference("low_mood_1", 4.0) == pytest.approx(3.0)
        assert generator.get_preference("low_mood_1") == pytest.approx(3.0)

    def test_unknown_preference(self):
        assert MessageGenerator().get_preference("missing") is None

    def test_preferences_bounded(self):
        generator = MessageGenerator(max_preferences=2)
        for i in range(3):
            generator.learn_preference(f"id_{i}", 5.0)
        assert len(generator.preferences) == 2
