import pytest

from phishcheck.core.risk_scorer import DEFAULT_WEIGHTS, RiskScorer, Weights, label_risk
from phishcheck.core.signals import Signal, SignalKind, Severity

scorer = RiskScorer()

TEXT = Signal(SignalKind.URGENCY_KEYWORD, Severity.TEXT, {"keyword": "urgent"})
SEVERE = Signal(SignalKind.IP_HOST, Severity.SEVERE)
MEDIUM = Signal(SignalKind.SENSITIVE_PATH, Severity.MEDIUM)
MILD = Signal(SignalKind.ALLOWLISTED, Severity.MILD)


def test_no_signals_scores_zero():
    assert scorer.score([], [], DEFAULT_WEIGHTS) == 0
    assert scorer.score([], [[], []], DEFAULT_WEIGHTS) == 0


def test_each_bucket_uses_its_weight():
    assert scorer.score([TEXT, TEXT], [], DEFAULT_WEIGHTS) == 10
    assert scorer.score([], [[SEVERE, MEDIUM, MILD]], DEFAULT_WEIGHTS) == 31
    assert scorer.score([TEXT], [[SEVERE], [MILD]], DEFAULT_WEIGHTS) == 26


def test_score_is_clamped_to_100():
    assert scorer.score([TEXT] * 10, [[SEVERE] * 10], DEFAULT_WEIGHTS) == 100


def test_half_points_round_up():
    weights = Weights(text=2.5)
    assert scorer.score([TEXT], [], weights) == 3
    assert scorer.score([TEXT, TEXT, TEXT], [], weights) == 8


def test_raising_a_weight_never_lowers_the_score():
    signals = [[SEVERE, MEDIUM], [MILD]]
    previous = 0
    for severe in range(1, 26):
        current = scorer.score([TEXT], signals, Weights(url_severe=severe))
        assert current >= previous
        previous = current


def test_categorize_thresholds():
    assert scorer.categorize(70) == "malicious"
    assert scorer.categorize(69) == "risky"
    assert scorer.categorize(40) == "risky"
    assert scorer.categorize(39) == "ok"
    assert scorer.categorize(0) == "ok"


def test_list_override_wins_over_score():
    assert scorer.categorize(95, "trusted") == "trusted"
    assert scorer.categorize(0, "malicious") == "malicious"


def test_custom_thresholds():
    strict = RiskScorer(malicious_threshold=50, suspicious_threshold=20)
    assert strict.categorize(50) == "malicious"
    assert strict.categorize(20) == "risky"
    assert strict.label(25).tier == "medium"


def test_label_tiers():
    assert label_risk(100).tier == "high"
    assert label_risk(70).tier == "high"
    assert label_risk(69).tier == "medium"
    assert label_risk(40).tier == "medium"
    assert label_risk(39).tier == "low"

    high = label_risk(80)
    assert high.label == "High risk"
    assert high.hint == "Do not click or enter personal data"
    assert label_risk(10, "th").label == "เสี่ยงต่ำ"


def test_weights_serialization():
    weights = Weights(text=3, url_severe=20, url_medium=12, url_mild=4)
    assert weights.to_dict() == {"text": 3, "urlSevere": 20, "urlMedium": 12, "urlMild": 4}
    assert Weights.from_dict(weights.to_dict()) == weights
    assert Weights.from_dict({"url_severe": 9}).url_severe == 9
    assert Weights.from_dict({}) == DEFAULT_WEIGHTS


@pytest.mark.parametrize("bad", ["10", None, True, float("nan"), float("inf")])
def test_weights_reject_non_numeric_values(bad):
    with pytest.raises(TypeError):
        Weights.from_dict({"urlSevere": bad})
