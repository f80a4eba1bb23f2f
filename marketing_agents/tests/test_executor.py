"""
Tests for plan execution.

Tests partial-failure containment, sequential context propagation,
hybrid level ordering and result keys, and router-level error capture.
"""

import asyncio
import json

from marketing_agents.providers.base import CapabilityProvider
from marketing_agents.providers.registry import CapabilityRegistry
from marketing_agents.routing.config import RouterConfig
from marketing_agents.routing.decomposition import decompose_tasks
from marketing_agents.routing.executor import PlanExecutor, resolve_task_capability
from marketing_agents.routing.router import AgentRouter
from marketing_agents.routing.selection import CapabilitySelection
from marketing_agents.routing.strategy import estimate_duration
from marketing_agents.shared.contracts import (
    Plan,
    ProviderMetadata,
    ProviderResponse,
    RoutingContext,
    Task,
)


# ============================================================================
# Test Fixtures
# ============================================================================


class _RecordingProvider(CapabilityProvider):
    """Provider that records every call into a shared log."""

    def __init__(self, name, content=None, error=None, log=None):
        self.name = name
        self.content = content if content is not None else f"{name} output"
        self.error = error
        self.log = log if log is not None else []
        self.contexts = []

    async def execute(self, prompt, context=None):
        self.log.append(self.name)
        self.contexts.append(dict(context or {}))
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return ProviderResponse(
            content=self.content,
            metadata=ProviderMetadata(provider=self.name, execution_time_ms=1.0),
        )


def _make_context(**kwargs):
    """Create a routing context for a business audit."""
    return RoutingContext(
        task_identifier="business_audit",
        input={"business_name": "Acme Plumbing"},
        **kwargs,
    )


def _make_plan(primary, supporting, strategy, tasks=None):
    """Create a plan over the given capabilities."""
    if tasks is None:
        tasks = decompose_tasks(
            "business_audit", CapabilitySelection(primary=primary, supporting=list(supporting))
        )
    return Plan(
        plan_id="test-plan",
        primary_capability=primary,
        supporting_capabilities=list(supporting),
        tasks=tasks,
        strategy=strategy,
        estimated_total_duration_seconds=estimate_duration(tasks, strategy),
        confidence=0.9,
    )


def _run(registry, plan, context=None, config=None):
    executor = PlanExecutor(registry, config)
    return asyncio.run(executor.execute(plan, context or _make_context()))


# ============================================================================
# Parallel
# ============================================================================


class TestParallelExecution:
    """Tests for the parallel strategy."""

    def test_second_provider_failure_keeps_first_result(self):
        """A failing sibling does not discard a successful result."""
        registry = CapabilityRegistry([
            _RecordingProvider("strategic-analysis"),
            _RecordingProvider("competitive-intelligence", error=RuntimeError("rate limited")),
        ])
        plan = _make_plan("strategic-analysis", ["competitive-intelligence"], "parallel")

        result = _run(registry, plan)

        assert result.results["strategic-analysis"].content == "strategic-analysis output"
        assert "competitive-intelligence" not in result.results
        assert len(result.errors) == 1
        assert result.errors[0].capability == "competitive-intelligence"
        assert result.errors[0].message == "rate limited"

    def test_siblings_get_identical_context(self):
        """Parallel providers see no cross-sibling output."""
        a = _RecordingProvider("strategic-analysis")
        b = _RecordingProvider("competitive-intelligence")
        plan = _make_plan("strategic-analysis", ["competitive-intelligence"], "parallel")

        _run(CapabilityRegistry([a, b]), plan, _make_context(intelligence={"reviews": 42}))

        assert a.contexts == b.contexts
        assert json.loads(a.contexts[0]["intelligence"]) == {"reviews": 42}
        assert "previousAnalysis" not in a.contexts[0]


# ============================================================================
# Sequential
# ============================================================================


class TestSequentialExecution:
    """Tests for the sequential strategy."""

    def test_previous_analysis_propagates_verbatim(self):
        """The second provider receives the first output under previousAnalysis."""
        first = _RecordingProvider("strategic-analysis", content="Line 1\nLine 2 {json?}")
        second = _RecordingProvider("marketing-content")
        plan = _make_plan("strategic-analysis", ["marketing-content"], "sequential")

        result = _run(CapabilityRegistry([first, second]), plan)

        assert first.contexts[0]["previousAnalysis"] == ""
        assert second.contexts[0]["previousAnalysis"] == "Line 1\nLine 2 {json?}"
        assert list(result.results) == ["strategic-analysis", "marketing-content"]

    def test_outputs_accumulate_in_issuance_order(self):
        """Later providers see every earlier success joined by blank lines."""
        providers = [
            _RecordingProvider("a", content="A"),
            _RecordingProvider("b", content="B"),
            _RecordingProvider("c", content="C"),
        ]
        plan = _make_plan("a", ["b", "c"], "sequential")

        _run(CapabilityRegistry(providers), plan)

        assert providers[2].contexts[0]["previousAnalysis"] == "A\n\nB"

    def test_failure_is_recorded_and_skipped(self):
        """A failed provider contributes nothing and execution continues."""
        providers = [
            _RecordingProvider("a", content="A"),
            _RecordingProvider("b", error=RuntimeError("down")),
            _RecordingProvider("c", content="C"),
        ]
        plan = _make_plan("a", ["b", "c"], "sequential")

        result = _run(CapabilityRegistry(providers), plan)

        assert providers[2].contexts[0]["previousAnalysis"] == "A"
        assert set(result.results) == {"a", "c"}
        assert [e.capability for e in result.errors] == ["b"]

    def test_missing_capability_is_recorded(self):
        """An unregistered capability becomes a per-provider error."""
        plan = _make_plan("strategic-analysis", ["ghost-capability"], "sequential")

        result = _run(CapabilityRegistry([_RecordingProvider("strategic-analysis")]), plan)

        assert "strategic-analysis" in result.results
        assert result.errors[0].capability == "ghost-capability"
        assert "not found" in result.errors[0].message


# ============================================================================
# Hybrid
# ============================================================================


class TestHybridExecution:
    """Tests for the hybrid strategy."""

    def test_levels_run_in_order_with_keyed_results(self):
        """Synthesis runs after every other task; keys combine capability and type."""
        log = []
        registry = CapabilityRegistry([
            _RecordingProvider("strategic-analysis", log=log),
            _RecordingProvider("competitive-intelligence", log=log),
            _RecordingProvider("marketing-content", log=log),
        ])
        plan = _make_plan(
            "strategic-analysis", ["competitive-intelligence", "marketing-content"], "hybrid"
        )

        result = _run(registry, plan)

        assert set(result.results) == {
            "strategic-analysis_primary",
            "competitive-intelligence_supporting",
            "competitive-intelligence_synthesis",
        }
        assert len(log) == 4
        assert sorted(log[:3]) == [
            "competitive-intelligence",
            "competitive-intelligence",
            "strategic-analysis",
        ]
        assert log[3] == "competitive-intelligence"
        assert result.errors == []

    def test_non_primary_tasks_bind_to_first_supporting(self):
        """By default every non-primary task runs on the first supporting capability."""
        log = []
        registry = CapabilityRegistry([
            _RecordingProvider("strategic-analysis", log=log),
            _RecordingProvider("competitive-intelligence", log=log),
            _RecordingProvider("marketing-content", log=log),
        ])
        plan = _make_plan(
            "strategic-analysis", ["competitive-intelligence", "marketing-content"], "hybrid"
        )

        _run(registry, plan)

        assert log.count("strategic-analysis") == 1
        assert log.count("competitive-intelligence") == 3
        assert log.count("marketing-content") == 0

    def test_bound_capabilities_when_enabled(self):
        """With bind_task_capabilities each supporting task uses its recorded capability."""
        log = []
        registry = CapabilityRegistry([
            _RecordingProvider("strategic-analysis", log=log),
            _RecordingProvider("competitive-intelligence", log=log),
            _RecordingProvider("marketing-content", log=log),
        ])
        plan = _make_plan(
            "strategic-analysis", ["competitive-intelligence", "marketing-content"], "hybrid"
        )

        result = _run(registry, plan, config=RouterConfig(bind_task_capabilities=True))

        assert set(result.results) == {
            "strategic-analysis_primary",
            "competitive-intelligence_supporting",
            "marketing-content_supporting",
            "competitive-intelligence_synthesis",
        }
        assert log.count("marketing-content") == 1
        assert log.count("competitive-intelligence") == 2

    def test_task_resolution(self):
        """Tasks resolve from their type unless bound capabilities are enabled."""
        primary = Task(
            task_id="p", type="primary", description="p", priority="high",
            estimated_duration_seconds=1,
        )
        supporting = Task(
            task_id="c", type="supporting", description="c", priority="medium",
            estimated_duration_seconds=1, capability="c",
        )
        synthesis = Task(
            task_id="s", type="synthesis", description="s", priority="high",
            estimated_duration_seconds=1, dependencies=["p", "c"],
        )
        with_support = _make_plan("a", ["b", "c"], "hybrid", tasks=[primary, supporting, synthesis])
        without_support = _make_plan("a", [], "hybrid", tasks=[primary, synthesis])

        assert resolve_task_capability(primary, with_support) == "a"
        assert resolve_task_capability(supporting, with_support) == "b"
        assert resolve_task_capability(supporting, with_support, use_bound=True) == "c"
        assert resolve_task_capability(synthesis, with_support) == "b"
        assert resolve_task_capability(synthesis, without_support) == "a"

    def test_level_failure_does_not_stop_later_levels(self):
        """A failing task is recorded and the next level still runs."""
        log = []
        registry = CapabilityRegistry([
            _RecordingProvider("a", error=RuntimeError("bad"), log=log),
            _RecordingProvider("b", log=log),
        ])
        plan = _make_plan("a", ["b"], "hybrid")

        result = _run(registry, plan)

        assert "b_supporting" in result.results
        assert "b_synthesis" in result.results
        assert [e.capability for e in result.errors] == ["a"]


# ============================================================================
# Router
# ============================================================================


class TestRouterExecutePlan:
    """Tests for AgentRouter.execute_plan."""

    def test_control_error_recorded_as_router_error(self, monkeypatch):
        """Executor control failures are captured, not raised."""
        router = AgentRouter(CapabilityRegistry(), _RecordingProvider("task-planner"))
        plan = _make_plan("strategic-analysis", [], "sequential")

        async def broken_execute(plan, context):
            raise RuntimeError("scheduler bug")

        monkeypatch.setattr(router.executor, "execute", broken_execute)
        result = asyncio.run(router.execute_plan(plan, _make_context()))

        assert result.results == {}
        assert result.errors[0].capability == "router"
        assert result.errors[0].message == "scheduler bug"

    def test_route_and_execute(self):
        """Planning and execution compose end to end."""
        planner = _RecordingProvider(
            "task-planner", content='{"intent": "Write emails", "complexity": "simple"}'
        )
        registry = CapabilityRegistry([_RecordingProvider("marketing-content", content="Hello!")])
        router = AgentRouter(registry, planner)

        result = asyncio.run(
            router.route_and_execute(RoutingContext(task_identifier="email_hub"))
        )

        assert result.plan.strategy == "sequential"
        assert result.results["marketing-content"].content == "Hello!"
