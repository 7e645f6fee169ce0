"""Tests for the decision recorder."""

from bjengine.cards import Card, Rank
from bjengine.hand import Hand
from bjengine.statistics import DecisionRecorder, ScenarioKey
from bjengine.statistics.recorder import DEFAULT_HISTORY_SIZE
from bjengine.strategy import Action, Capabilities


class TestDecisionRecorder:
    """Tests for DecisionRecorder."""

    def test_records_optimal_decision(self, recorder, store):
        record = recorder.record_decision(Hand.of("8", "8"), Card(Rank.SEVEN), Action.SPLIT)
        assert record.is_optimal
        assert record.optimal_action == Action.SPLIT
        assert record.key == ScenarioKey.parse("pair:8 vs 7")
        assert record.player_value == 16
        assert store.get(record.key).correct_count == 1

    def test_records_mistake(self, recorder, store):
        record = recorder.record_decision(Hand.of("10", "6"), Card(Rank.KING), Action.STAND)
        assert not record.is_optimal
        assert record.optimal_action == Action.SURRENDER
        stat = store.get(record.key)
        assert stat.occurrence_count == 1
        assert stat.correct_count == 0
        assert stat.action_frequency == {Action.STAND: 1}

    def test_uses_hand_at_decision_time(self, recorder):
        """Test grading against the pre-action hand."""
        before_hit = Hand.of("10", "2")
        record = recorder.record_decision(before_hit, Card(Rank.SEVEN), Action.HIT)
        assert record.key.label == "hard:12 vs 7"
        assert record.is_optimal

    def test_capabilities_change_optimal(self, recorder):
        record = recorder.record_decision(
            Hand.of("10", "6"),
            Card(Rank.TEN),
            Action.HIT,
            Capabilities(can_surrender=False),
        )
        assert record.optimal_action == Action.HIT
        assert record.is_optimal

    def test_surrender_is_an_ordinary_action(self, recorder, store):
        record = recorder.record_decision(Hand.of("10", "6"), Card(Rank.ACE), Action.SURRENDER)
        assert record.is_optimal
        assert store.get(record.key).action_frequency == {Action.SURRENDER: 1}

    def test_same_scenario_accumulates(self, recorder, store):
        recorder.record_decision(Hand.of("10", "6"), Card(Rank.TEN), Action.HIT)
        recorder.record_decision(Hand.of("7", "9"), Card(Rank.TEN), Action.SURRENDER)
        stat = store.get(ScenarioKey.parse("hard:16 vs 10"))
        assert stat.occurrence_count == 2
        assert stat.correct_count == 1
        assert len(store) == 1

    def test_invalid_input_records_nothing(self, recorder, store):
        assert recorder.record_decision(Hand(), Card(Rank.TEN), Action.HIT) is None
        assert recorder.record_decision(None, Card(Rank.TEN), Action.HIT) is None
        assert recorder.record_decision(Hand.of("10", "6"), None, Action.HIT) is None
        assert len(store) == 0
        assert recorder.history == []

    def test_accepts_card_lists(self, recorder):
        record = recorder.record_decision([Card(Rank.ACE), Card(Rank.SEVEN)], Card(Rank.NINE), Action.HIT)
        assert record.hand == Hand.of("A", "7")
        assert record.is_optimal


class TestDecisionHistory:
    """Tests for the recorder's history views."""

    def test_accuracy(self, recorder):
        assert recorder.accuracy == 0.0
        recorder.record_decision(Hand.of("10", "7"), Card(Rank.TEN), Action.STAND)
        recorder.record_decision(Hand.of("10", "7"), Card(Rank.TEN), Action.HIT)
        assert recorder.accuracy == 0.5

    def test_accuracy_by_action(self, recorder):
        recorder.record_decision(Hand.of("10", "7"), Card(Rank.TEN), Action.STAND)
        recorder.record_decision(Hand.of("5", "6"), Card(Rank.SIX), Action.HIT)
        recorder.record_decision(Hand.of("5", "6"), Card(Rank.SIX), Action.DOUBLE)
        by_action = recorder.accuracy_by_action()
        assert by_action[Action.STAND].accuracy == 1.0
        assert by_action[Action.HIT].total == 1
        assert by_action[Action.HIT].correct == 0
        assert by_action[Action.DOUBLE].correct == 1

    def test_mistakes_most_recent_first(self, recorder):
        recorder.record_decision(Hand.of("10", "7"), Card(Rank.TEN), Action.HIT)
        recorder.record_decision(Hand.of("8", "8"), Card(Rank.TEN), Action.STAND)
        recorder.record_decision(Hand.of("10", "10"), Card(Rank.TEN), Action.STAND)
        mistakes = recorder.mistakes()
        assert [m.action for m in mistakes] == [Action.STAND, Action.HIT]
        assert len(recorder.mistakes(limit=1)) == 1

    def test_clear_history_keeps_aggregates(self, recorder, store):
        recorder.record_decision(Hand.of("10", "7"), Card(Rank.TEN), Action.STAND)
        recorder.clear_history()
        assert recorder.history == []
        assert len(store) == 1

    def test_history_is_bounded(self, store):
        recorder = DecisionRecorder(store, max_history=3)
        for _ in range(5):
            recorder.record_decision(Hand.of("10", "7"), Card(Rank.TEN), Action.STAND)
        recorder.record_decision(Hand.of("10", "7"), Card(Rank.TEN), Action.HIT)
        assert len(recorder.history) == 3
        assert recorder.history[-1].action == Action.HIT
        # Aggregates still count every decision
        assert store.get(ScenarioKey.parse("hard:17 vs 10")).occurrence_count == 6

    def test_default_history_cap(self):
        recorder = DecisionRecorder()
        for _ in range(DEFAULT_HISTORY_SIZE + 50):
            recorder.record_decision(Hand.of("10", "6"), Card(Rank.TEN), Action.HIT)
        assert len(recorder.history) == DEFAULT_HISTORY_SIZE
        assert recorder.store.get(ScenarioKey.parse("hard:16 vs 10")).occurrence_count == DEFAULT_HISTORY_SIZE + 50
