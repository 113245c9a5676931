"""Expansion of a BatchSelection into concrete BenchmarkCombinations."""

from ze_bench.agent.domain.backend import AgentBackend
from ze_bench.batch.domain.observer import BatchObserver
from ze_bench.batch.domain.selection import BatchSelection
from ze_bench.run.domain.combination import BenchmarkCombination
from ze_bench.scenario.domain.loader import ScenarioLoader


def models_for(agent: AgentBackend, models: list[str]) -> list[str | None]:
    """Model axis for one backend.

    Backends that ignore models get [None]. Otherwise the given models, or
    [None] when none were given so the adapter falls back to its default.
    """
    if agent.ignores_model:
        return [None]
    return [model for model in models if model] or [None]


def expand_combinations(
    selection: BatchSelection,
    scenario_loader: ScenarioLoader,
    observer: BatchObserver,
) -> list[BenchmarkCombination]:
    """suites x scenarios x tiers x agents x models, in that nesting order.

    Requested tiers a scenario has no prompt for are dropped; a scenario left
    with no tiers is skipped and reported to the observer.
    """
    combinations: list[BenchmarkCombination] = []
    for suite in selection.suites:
        scenarios = selection.scenarios or scenario_loader.list_scenarios(suite=suite)
        for scenario in scenarios:
            available = scenario_loader.available_tiers(suite=suite, scenario=scenario)
            tiers = (
                [tier for tier in selection.tiers if tier in available]
                if selection.tiers
                else available
            )
            if not tiers:
                observer.batch_scenario_skipped(
                    suite=suite, scenario=scenario, reason="no matching tiers"
                )
                continue
            for tier in tiers:
                for agent in selection.agents:
                    for model in models_for(agent=agent, models=selection.models):
                        combinations.append(
                            BenchmarkCombination(
                                suite=suite,
                                scenario=scenario,
                                tier=tier,
                                agent=agent,
                                model=model,
                            )
                        )
    return combinations
