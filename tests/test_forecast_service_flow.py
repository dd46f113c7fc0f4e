from datetime import date

import pytest

from core.exceptions import BusinessRuleError, ValidationError
from core.models import BottleneckSeverity, BurnoutRiskLevel, ResourceAssignment, SuggestionType
from core.services.advisory import AdviceProvider, RebalanceAdvisoryGateway, parse_suggestions
from core.services.forecasting import ResourceForecastService, to_payload
from helpers import AS_OF, seed_assignment, seed_project, seed_resource, seed_task


class StaticProvider(AdviceProvider):
    name = "static"

    def __init__(self):
        self.requests = []

    def suggest(self, request):
        self.requests.append(request)
        return parse_suggestions(
            {
                "suggestions": [
                    {
                        "type": "split",
                        "description": "Split the integration task",
                        "estimatedImpact": "Peak drops below 110%",
                        "confidence": 65,
                    }
                ]
            }
        )


def _seed_overloaded_project(services):
    schedule = seed_project(services)
    rita = seed_resource(services, name="Rita", skills=["javascript", "react"], capacity=40.0)
    weeks = [
        ("Login page", date(2024, 1, 1), date(2024, 1, 7), 45.0),
        ("Dashboard", date(2024, 1, 8), date(2024, 1, 14), 46.0),
        ("Integration", date(2024, 1, 15), date(2024, 1, 21), 64.0),
    ]
    for name, start, end, hours in weeks:
        task = seed_task(services, schedule, name, start=start, end=end)
        seed_assignment(services, rita, task, start, end, hours)
    return schedule, rita


def test_forecast_reports_bottlenecks_burnout_and_capacity(services):
    _, rita = _seed_overloaded_project(services)
    seed_resource(services, name="Bench", skills=["go"])

    result = services["forecast_service"].forecast_bottlenecks("proj-1", 8, as_of=AS_OF)

    assert [(b.week, b.utilization, b.severity) for b in result.bottlenecks] == [
        (date(2024, 1, 1), 112.5, BottleneckSeverity.WARNING),
        (date(2024, 1, 8), 115.0, BottleneckSeverity.WARNING),
        (date(2024, 1, 15), 160.0, BottleneckSeverity.SEVERE),
    ]
    assert [t.task_name for t in result.bottlenecks[2].contributing_tasks] == ["Integration"]

    [risk] = result.burnout_risks
    assert risk.resource_name == "Rita"
    assert risk.consecutive_overload_weeks == 3
    assert risk.risk_level is BurnoutRiskLevel.LOW

    # Only resources with assignments in the project are forecast.
    assert result.summary.total_resources == 1
    assert result.summary.over_allocated_count == 1
    # (112.5 + 115 + 160) / 8 weeks = 48.4375
    assert result.summary.average_utilization == 48

    assert len(result.capacity_forecast) == 8
    assert result.capacity_forecast[0].deficit == 5.0
    assert result.capacity_forecast[3].surplus == 40.0
    assert result.rebalance_suggestions is None


def test_forecast_looks_up_tasks_across_project_schedules(services):
    main = seed_project(services)
    extra = seed_project(services, schedule_name="Phase 2")
    unrelated = seed_project(services, project_id="proj-2")
    dev = seed_resource(services, name="Dev", capacity=40.0)
    t1 = seed_task(services, main, "Backend", start=date(2024, 1, 1), end=date(2024, 1, 5))
    t2 = seed_task(services, extra, "Reports", start=date(2024, 1, 1), end=date(2024, 1, 5))
    t3 = seed_task(services, unrelated, "Elsewhere", start=date(2024, 1, 1), end=date(2024, 1, 5))
    seed_assignment(services, dev, t1, date(2024, 1, 1), date(2024, 1, 5), 30.0)
    seed_assignment(services, dev, t2, date(2024, 1, 1), date(2024, 1, 5), 20.0)
    seed_assignment(services, dev, t3, date(2024, 1, 1), date(2024, 1, 5), 40.0)

    result = services["forecast_service"].forecast_bottlenecks("proj-1", 2, as_of=AS_OF)

    [bottleneck] = result.bottlenecks
    assert bottleneck.utilization == 125.0
    assert sorted(t.task_name for t in bottleneck.contributing_tasks) == ["Backend", "Reports"]


def test_empty_project_yields_empty_forecast(services):
    result = services["forecast_service"].forecast_bottlenecks("nothing-here", as_of=AS_OF)

    assert result.bottlenecks == []
    assert result.burnout_risks == []
    assert result.capacity_forecast == []
    assert (result.summary.total_resources, result.summary.average_utilization) == (0, 0)
    assert "rebalanceSuggestions" not in to_payload(result)


@pytest.mark.parametrize("weeks", [0, -2, 53])
def test_forecast_rejects_invalid_horizon(services, weeks):
    with pytest.raises(ValidationError) as exc:
        services["forecast_service"].forecast_bottlenecks("proj-1", weeks, as_of=AS_OF)
    assert exc.value.code == "FORECAST_INVALID_HORIZON"


def test_forecast_rejects_malformed_assignment(services):
    schedule = seed_project(services)
    dev = seed_resource(services, name="Dev")
    task = seed_task(services, schedule, "Broken")
    seed_assignment(services, dev, task, date(2024, 1, 10), date(2024, 1, 2), 10.0)

    with pytest.raises(ValidationError) as exc:
        services["forecast_service"].forecast_bottlenecks("proj-1", as_of=AS_OF)
    assert exc.value.code == "ASSIGNMENT_INVALID_RANGE"


def test_forecast_fails_on_assignment_to_unknown_resource(services):
    schedule = seed_project(services)
    task = seed_task(services, schedule, "Orphan")
    services["assignment_repo"].add(
        ResourceAssignment.create("ghost", task.id, schedule.id, date(2024, 1, 1), date(2024, 1, 5), 10.0)
    )
    services["session"].commit()

    with pytest.raises(BusinessRuleError) as exc:
        services["forecast_service"].forecast_bottlenecks("proj-1", as_of=AS_OF)
    assert exc.value.code == "ASSIGNMENT_UNKNOWN_RESOURCE"


def test_default_horizon_comes_from_environment(services, monkeypatch):
    schedule = seed_project(services)
    dev = seed_resource(services, name="Dev")
    task = seed_task(services, schedule, "Steady")
    seed_assignment(services, dev, task, date(2024, 1, 1), date(2024, 6, 30), 20.0)

    monkeypatch.setenv("WFE_DEFAULT_WEEKS_AHEAD", "4")
    assert len(services["forecast_service"].forecast_bottlenecks("proj-1", as_of=AS_OF).capacity_forecast) == 4

    monkeypatch.setenv("WFE_DEFAULT_WEEKS_AHEAD", "lots")
    assert len(services["forecast_service"].forecast_bottlenecks("proj-1", as_of=AS_OF).capacity_forecast) == 8


def test_advisory_suggestions_attached_when_bottlenecks_exist(services):
    _seed_overloaded_project(services)
    seed_resource(services, name="Spare", skills=["react"], is_active=False)
    provider = StaticProvider()
    svc = ResourceForecastService(
        services["resource_repo"],
        services["schedule_repo"],
        services["task_repo"],
        services["assignment_repo"],
        advisory_gateway=RebalanceAdvisoryGateway(provider=provider),
    )

    result = svc.forecast_bottlenecks("proj-1", 8, caller_id="planner-7", as_of=AS_OF)

    [suggestion] = result.rebalance_suggestions
    assert suggestion.type is SuggestionType.SPLIT
    [request] = provider.requests
    assert sorted(entry.name for entry in request.resources) == ["Rita", "Spare"]
    assert len(request.bottlenecks) == 3

    payload = to_payload(result)
    assert payload["rebalanceSuggestions"][0]["estimatedImpact"] == "Peak drops below 110%"
    assert "affectedResourceId" not in payload["rebalanceSuggestions"][0]


def test_advisory_not_consulted_without_bottlenecks(services):
    schedule = seed_project(services)
    dev = seed_resource(services, name="Dev")
    task = seed_task(services, schedule, "Light")
    seed_assignment(services, dev, task, date(2024, 1, 1), date(2024, 1, 31), 10.0)
    provider = StaticProvider()
    svc = ResourceForecastService(
        services["resource_repo"],
        services["schedule_repo"],
        services["task_repo"],
        services["assignment_repo"],
        advisory_gateway=RebalanceAdvisoryGateway(provider=provider),
    )

    result = svc.forecast_bottlenecks("proj-1", 4, as_of=AS_OF)

    assert result.rebalance_suggestions is None
    assert provider.requests == []


def test_payload_uses_camel_case_wire_names(services):
    _seed_overloaded_project(services)

    payload = to_payload(services["forecast_service"].forecast_bottlenecks("proj-1", 8, as_of=AS_OF))

    assert set(payload) == {"bottlenecks", "burnoutRisks", "capacityForecast", "summary"}
    assert payload["summary"] == {"totalResources": 1, "overAllocatedCount": 1, "averageUtilization": 48}
    first = payload["bottlenecks"][0]
    assert first["week"] == "2024-01-01"
    assert first["severity"] == "warning"
    assert first["contributingTasks"][0] == {
        "taskId": first["contributingTasks"][0]["taskId"],
        "taskName": "Login page",
        "hoursPerWeek": 45.0,
    }
    assert payload["burnoutRisks"][0]["riskLevel"] == "low"
    assert payload["burnoutRisks"][0]["consecutiveOverloadWeeks"] == 3
    assert set(payload["capacityForecast"][0]) == {
        "week",
        "totalCapacity",
        "totalAllocated",
        "surplus",
        "deficit",
    }


def test_forecast_logs_caller(services, caplog):
    with caplog.at_level("INFO", logger="core.services.forecasting.forecast"):
        services["forecast_service"].forecast_bottlenecks("proj-1", 2, caller_id="planner-7", as_of=AS_OF)
    assert any("planner-7" in record.getMessage() for record in caplog.records)


class EmptyHandedProvider(AdviceProvider):
    name = "empty-handed"

    def suggest(self, request):
        return None


def test_forecast_survives_provider_returning_nothing(services):
    _seed_overloaded_project(services)
    svc = ResourceForecastService(
        services["resource_repo"],
        services["schedule_repo"],
        services["task_repo"],
        services["assignment_repo"],
        advisory_gateway=RebalanceAdvisoryGateway(provider=EmptyHandedProvider()),
    )

    result = svc.forecast_bottlenecks("proj-1", 4, as_of=AS_OF)

    assert len(result.bottlenecks) == 3
    assert result.rebalance_suggestions is None


class CountingResourceRepo:
    def __init__(self, inner):
        self._inner = inner
        self.list_all_calls = 0

    def get(self, resource_id):
        return self._inner.get(resource_id)

    def list_all(self):
        self.list_all_calls += 1
        return self._inner.list_all()


def test_roster_is_not_read_when_advice_is_not_requested(services):
    _seed_overloaded_project(services)
    repo = CountingResourceRepo(services["resource_repo"])
    svc = ResourceForecastService(
        repo,
        services["schedule_repo"],
        services["task_repo"],
        services["assignment_repo"],
    )

    result = svc.forecast_bottlenecks("proj-1", 4, as_of=AS_OF)

    assert len(result.bottlenecks) == 3
    assert repo.list_all_calls == 0
