import pytest

from quorum_gate.scenario import ScenarioError, load_scenario, run_scenario


def _voters(n):
    return [{"id": f"v{i}", "x": i} for i in range(1, n + 1)]


def test_partial_participation_and_double_voting():
    data = {
        "coefficients": [11, 5, 9],
        "participants": _voters(5),
        "votes": [
            {"id": "v1", "affirm": True},
            {"id": "v1", "affirm": True},
            {"id": "v2", "affirm": True},
            {"id": "v3", "affirm": False},
        ],
        "execute": True,
    }
    result = run_scenario(data)
    summary = result.summary()

    assert summary["yes_count"] == 2
    assert summary["total_count"] == 3
    assert summary["gate_open"] is False
    assert [e["code"] for e in result.errors] == ["already_voted", "upgrade_not_approved"]
    assert summary["content"] == "Before upgrading"


def test_policy_section_changes_the_field():
    data = {
        "policy": {"prime": 7919, "threshold": 2, "participants": 3, "secret": 100},
        "coefficients": [100, 17],
        "participants": _voters(3),
        "votes": {"v2": True, "v3": True},
    }
    result = run_scenario(data)
    assert result.gate.gate_open
    assert result.gate.state.x_values == [2, 3]


def test_wrong_degree_is_reported():
    data = {"coefficients": [11, 5], "participants": [{"id": "a", "share": [1, 1]}]}
    result = run_scenario(data)
    assert result.errors[0]["code"] == "invalid_polynomial_degree"
    assert not result.gate.state.configured


@pytest.mark.parametrize(
    "data",
    [
        {"policy": ["not", "a", "mapping"]},
        {"policy": {"threshold": 9}},
        {"participants": [{"x": 1}]},
        {"participants": [{"id": "a"}]},
        {"participants": [{"id": "a", "x": 1}]},
        {"coefficients": [11, 5, 9], "participants": [{"id": "a", "share": [1]}]},
        {"participants": [{"id": "a", "x": "one"}]},
        {"participants": [{"id": "a", "share": 7}]},
        {"participants": {"id": "a"}},
        {"coefficients": ["eleven", 5, 9]},
        {"votes": [{"affirm": True}]},
        {"votes": [{"id": "a"}]},
        {"votes": {"a": "yes"}},
        {"votes": "a"},
        {"content": 5, "execute": True},
    ],
)
def test_malformed_scenarios(data):
    with pytest.raises(ScenarioError):
        run_scenario(data)


def test_load_scenario(tmp_path):
    path = tmp_path / "s.yaml"
    path.write_text("dealer: root\ncoefficients: [11, 5, 9]\n")
    data = load_scenario(path)
    assert data["dealer"] == "root"
    assert run_scenario(data).gate.state.configured
