from datetime import date, timedelta

import pytest

from core.models import BottleneckSeverity, BurnoutRiskLevel
from core.services.forecasting.bottlenecks import (
    assess_burnout_risks,
    classify_burnout,
    classify_severity,
    collect_contributing_tasks,
    detect_bottlenecks,
)
from core.services.forecasting.workload import build_resource_workloads
from helpers import AS_OF, make_assignment, make_resource


def _weekly(resource, hours_by_week):
    """One assignment per Monday-aligned week, keyed by week index from 2024-01-01."""
    out = []
    for index, hours in enumerate(hours_by_week):
        start = date(2024, 1, 1) + timedelta(weeks=index)
        end = start + timedelta(days=6)
        out.append(make_assignment(resource, f"task-{index}", start, end, hours))
    return out


def _analyze(resource, assignments, weeks_ahead=8, names=None):
    workloads = build_resource_workloads([resource], assignments, AS_OF, weeks_ahead)
    by_resource = {resource.id: assignments}
    bottlenecks = detect_bottlenecks(workloads, by_resource, names or {}, AS_OF, weeks_ahead)
    risks = assess_burnout_risks(workloads, AS_OF, weeks_ahead)
    return workloads, bottlenecks, risks


@pytest.mark.parametrize(
    "utilization, expected",
    [
        (100.1, BottleneckSeverity.WARNING),
        (125.0, BottleneckSeverity.WARNING),
        (125.1, BottleneckSeverity.CRITICAL),
        (150.0, BottleneckSeverity.CRITICAL),
        (150.1, BottleneckSeverity.SEVERE),
        (160.0, BottleneckSeverity.SEVERE),
    ],
)
def test_severity_bands(utilization, expected):
    assert classify_severity(utilization) is expected


@pytest.mark.parametrize(
    "run, expected",
    [
        (2, None),
        (3, BurnoutRiskLevel.LOW),
        (4, BurnoutRiskLevel.MEDIUM),
        (5, BurnoutRiskLevel.MEDIUM),
        (6, BurnoutRiskLevel.HIGH),
        (8, BurnoutRiskLevel.CRITICAL),
        (12, BurnoutRiskLevel.CRITICAL),
    ],
)
def test_burnout_levels_follow_longest_run(run, expected):
    assert classify_burnout(run) is expected


def test_three_week_overload_example():
    dev = make_resource("R", skills=["javascript", "react"], capacity=40.0)
    assignments = _weekly(dev, [45.0, 46.0, 64.0])

    _, bottlenecks, risks = _analyze(dev, assignments)

    assert [b.utilization for b in bottlenecks] == [112.5, 115.0, 160.0]
    assert [b.severity for b in bottlenecks] == [
        BottleneckSeverity.WARNING,
        BottleneckSeverity.WARNING,
        BottleneckSeverity.SEVERE,
    ]
    assert [b.week for b in bottlenecks] == [date(2024, 1, 1), date(2024, 1, 8), date(2024, 1, 15)]

    [risk] = risks
    assert risk.resource_id == dev.id
    assert risk.consecutive_overload_weeks == 3
    assert risk.risk_level is BurnoutRiskLevel.LOW


def test_two_overloaded_weeks_are_not_burnout():
    dev = make_resource("R", capacity=40.0)
    assignments = _weekly(dev, [45.0, 46.0])

    _, bottlenecks, risks = _analyze(dev, assignments)

    assert len(bottlenecks) == 2
    assert risks == []


def test_non_adjacent_overloads_do_not_form_a_run():
    dev = make_resource("R", capacity=40.0)
    assignments = _weekly(dev, [50.0, 40.0, 50.0, 30.0, 50.0])

    _, bottlenecks, risks = _analyze(dev, assignments)

    assert len(bottlenecks) == 3
    assert all(b.utilization > 100 for b in bottlenecks)
    assert risks == []


def test_exactly_full_week_is_not_a_bottleneck():
    dev = make_resource("R", capacity=40.0)
    _, bottlenecks, _ = _analyze(dev, _weekly(dev, [40.0]))
    assert bottlenecks == []


def test_contributing_tasks_use_task_names_and_fall_back_to_ids():
    dev = make_resource("R", capacity=40.0)
    assignments = [
        make_assignment(dev, "api", date(2024, 1, 1), date(2024, 1, 20), 30.0),
        make_assignment(dev, "ui", date(2024, 1, 3), date(2024, 1, 5), 20.0),
    ]

    _, bottlenecks, _ = _analyze(dev, assignments, names={"api": "Build API"})

    [week_one] = bottlenecks
    assert week_one.week == date(2024, 1, 1)
    assert [(t.task_id, t.task_name, t.hours_per_week) for t in week_one.contributing_tasks] == [
        ("api", "Build API", 30.0),
        ("ui", "ui", 20.0),
    ]


def test_collect_contributing_tasks_ignores_assignments_outside_week():
    dev = make_resource("R")
    assignments = [
        make_assignment(dev, "early", date(2023, 12, 1), date(2023, 12, 31), 10.0),
        make_assignment(dev, "now", date(2024, 1, 2), date(2024, 1, 2), 10.0),
    ]
    tasks = collect_contributing_tasks(assignments, date(2024, 1, 1), {})
    assert [t.task_id for t in tasks] == ["now"]


def test_burnout_only_counts_weeks_inside_horizon():
    dev = make_resource("R", capacity=40.0)
    assignments = _weekly(dev, [50.0, 50.0, 50.0, 50.0])

    _, bottlenecks, risks = _analyze(dev, assignments, weeks_ahead=2)

    assert len(bottlenecks) == 2
    assert risks == []
