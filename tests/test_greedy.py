import pytest

from config import RecommendationConfig
from models import Task, Employee
from workload.aggregator import recompute_loads
from assignment.greedy import (
    GreedyRebalancer,
    NO_REBALANCING_MESSAGE,
    NO_MOVES_MESSAGE,
    INVALID_IDS_MESSAGE,
)


def _flat_task(task_id, load, skill, assigned_to=None, urgency=0):
    # complexity 0 and urgency 0 make the load equal to the estimate
    return Task(
        id=task_id,
        title=f"Task {task_id}",
        required_skill=skill,
        estimated_hours=load,
        complexity=0,
        urgency=urgency,
        assigned_to=assigned_to,
    )


def test_shared_skill_move_is_recommended():
    a = Employee(id="A", name="A", skills=["Python", "Go"], capacity_hours=40)
    b = Employee(id="B", name="B", skills=["Python"], capacity_hours=40)
    tasks = [
        _flat_task("X", 10, "Python", "A"),
        _flat_task("Y", 14, "Go", "A"),
        _flat_task("Z", 14, "Go", "A"),
        _flat_task("W", 5, "Python", "B"),
    ]
    recompute_loads([a, b], tasks)

    result = GreedyRebalancer().recommend([a, b], tasks)

    assert len(result.recommendations) == 1
    rec = result.recommendations[0]
    assert rec.task_id == "X"
    assert rec.source.id == "A"
    assert rec.target.id == "B"
    assert rec.target.new_utilization == pytest.approx(37.5)
    assert rec.source.new_utilization == pytest.approx(70.0)
    assert rec.improvement == pytest.approx(25.0)
    assert rec.priority == pytest.approx(25.0 * 2 + 0 * 10 + 95.0 * 0.5)


def test_target_ceiling_is_exclusive():
    source = Employee(id="S", name="S", skills=["Go"], current_hours=39)
    near = Employee(id="N", name="N", skills=["Go"], current_hours=19)
    tasks = [_flat_task("T1", 15, "Go", "S")]

    # 19 + 15 = 34 hours is exactly 85%
    result = GreedyRebalancer().recommend([source, near], tasks)
    assert result.recommendations == []
    assert result.message == NO_MOVES_MESSAGE

    near.current_hours = 18.9
    result = GreedyRebalancer().recommend([source, near], tasks)
    assert [r.task_id for r in result.recommendations] == ["T1"]


def test_zero_load_task_is_never_moved():
    source = Employee(id="S", name="S", skills=["Go"], current_hours=39)
    idle = Employee(id="I", name="I", skills=["Go"])
    tasks = [_flat_task("T0", 0, "Go", "S")]

    result = GreedyRebalancer().recommend([source, idle], tasks)
    assert result.recommendations == []


def test_recommendations_respect_invariants(team):
    employees, tasks = team
    result = GreedyRebalancer().recommend(employees, tasks)

    assert [r.task_id for r in result.recommendations] == ["T1", "T2", "T3"]
    assert [r.target.id for r in result.recommendations] == ["E2", "E3", "E2"]
    for rec in result.recommendations:
        assert rec.target.new_utilization < 85
        assert rec.source.new_utilization < rec.source.current_utilization

    first = result.to_dict()["recommendations"][0]
    assert first["from"]["name"] == "Ava"
    assert first["to"]["new_utilization"] == 65.2
    assert first["priority"] == 188.35
    assert first["reasoning"].startswith('Move "Billing rewrite" from Ava (108.7% utilized)')


def test_top_ten_sorted_by_priority():
    source = Employee(id="S", name="S", skills=["Go"], capacity_hours=100)
    targets = [Employee(id=f"E{i}", name=f"E{i}", skills=["Go"], capacity_hours=100) for i in range(4)]
    tasks = [_flat_task(f"T{i}", 5 + i % 4, "Go", "S", urgency=1 + i % 3) for i in range(20)]
    employees = [source] + targets
    recompute_loads(employees, tasks)

    result = GreedyRebalancer().recommend(employees, tasks)

    assert result.potential_moves == 80
    assert len(result.recommendations) == 10
    priorities = [r.priority for r in result.recommendations]
    assert priorities == sorted(priorities, reverse=True)
    assert result.to_dict()["statistics"]["top_recommendations"] == 10


def test_max_recommendations_is_configurable(team):
    employees, tasks = team
    rebalancer = GreedyRebalancer(RecommendationConfig(max_recommendations=1))
    result = rebalancer.recommend(employees, tasks)
    assert len(result.recommendations) == 1
    assert result.potential_moves == 3


def test_recommend_is_deterministic(team):
    employees, tasks = team
    rebalancer = GreedyRebalancer()
    assert rebalancer.recommend(employees, tasks).to_dict() == rebalancer.recommend(employees, tasks).to_dict()


def test_nothing_to_rebalance_without_overload():
    employees = [Employee(id="E1", name="A", skills=["Go"], current_hours=10)]
    result = GreedyRebalancer().recommend(employees, [])
    assert result.message == NO_REBALANCING_MESSAGE
    assert result.overloaded_employees == 0


def test_nothing_to_rebalance_reports_overloaded_count():
    employees = [
        Employee(id="E1", name="A", skills=["Go"], current_hours=39),
        Employee(id="E2", name="B", skills=["Go"], current_hours=30),
    ]
    result = GreedyRebalancer().recommend(employees, [])
    assert result.message == NO_REBALANCING_MESSAGE
    assert result.overloaded_employees == 1
    assert result.available_employees == 0


def test_simulate_invalid_ids(team):
    employees, tasks = team
    rebalancer = GreedyRebalancer()
    for args in (("T404", "E1", "E2"), ("T1", "E404", "E2"), ("T1", "E1", "E404")):
        result = rebalancer.simulate(employees, tasks, *args)
        assert result.to_dict() == {"success": False, "error": INVALID_IDS_MESSAGE}


def test_simulate_skill_mismatch(team):
    employees, tasks = team
    result = GreedyRebalancer().simulate(employees, tasks, "T1", "E1", "E3")
    assert not result.success
    assert result.error == "Cleo does not have the required skill: Python"


def test_simulate_success_has_no_side_effects(team):
    employees, tasks = team
    rebalancer = GreedyRebalancer()

    first = rebalancer.simulate(employees, tasks, "T1", "E1", "E2").to_dict()
    second = rebalancer.simulate(employees, tasks, "T1", "E1", "E2").to_dict()

    assert first == second
    assert first["task"] == {"id": "T1", "title": "Billing rewrite", "load": 20.8}
    assert first["from"]["new_utilization"] == 56.7
    assert first["to"]["new_utilization"] == 65.2
    assert tasks[0].assigned_to == "E1"
    assert employees[0].current_hours == pytest.approx(43.48)
