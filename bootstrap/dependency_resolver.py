"""
Dependency resolution for Switchboard components.

Computes the *required set*: every enabled component plus everything it
depends on, transitively. Components that are not directly enabled are hidden
so that being pulled in as a dependency never puts a control on screen.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Sequence, Set, TYPE_CHECKING

if TYPE_CHECKING:
    from core.base_component import SwitchboardBaseComponent
    from core.registry import ComponentRegistry

logger = logging.getLogger(__name__)


class DependencyResolver:
    def __init__(self, registry: 'ComponentRegistry') -> None:
        self.registry = registry

    def resolve_required(self) -> List['SwitchboardBaseComponent']:
        """
        Return the required components in discovery order.

        Discovery order is not a topological order; initialization ordering
        comes from each component waiting on its own dependencies.
        """
        required: List['SwitchboardBaseComponent'] = []
        visited: Set[str] = set()

        for component in self.registry.get_all():
            if component.enabled:
                required.append(component)
                visited.add(component.component_id)
            else:
                component.hide()

        seeded = len(required)
        passes = 0
        while True:
            passes += 1
            length_before = len(required)
            # Iterating by index picks up components appended during this pass.
            index = 0
            while index < len(required):
                for dependency_id in required[index].dependencies:
                    if dependency_id in visited:
                        continue
                    dependency = self.registry.get_by_id(dependency_id)
                    if dependency is None:
                        logger.debug("Dependency '%s' of '%s' is not registered; skipping", dependency_id, required[index].component_id)
                        continue
                    visited.add(dependency_id)
                    required.append(dependency)
                index += 1
            if len(required) == length_before:
                break

        logger.info(
            'Resolved %d required component(s) (%d enabled, %d pulled in as dependencies) in %d pass(es)',
            len(required), seeded, len(required) - seeded, passes,
        )
        return required

    def find_cycles(self, components: Sequence['SwitchboardBaseComponent']) -> List[List[str]]:
        """
        Report dependency cycles among ``components`` as id paths.

        Each cycle is listed once, as ``[a, b, ..., a]``. Unregistered
        dependencies are ignored, as they are during initialization.
        """
        white, grey, black = 0, 1, 2
        colour: Dict[str, int] = {c.component_id: white for c in components}
        cycles: List[List[str]] = []
        seen: Set[frozenset] = set()

        def visit(component_id: str, path: List[str]) -> None:
            colour[component_id] = grey
            path.append(component_id)
            component = self.registry.get_by_id(component_id)
            for dependency_id in component.dependencies if component is not None else ():
                state = colour.get(dependency_id)
                if state is None:
                    continue
                if state == grey:
                    cycle = path[path.index(dependency_id):] + [dependency_id]
                    key = frozenset(cycle)
                    if key not in seen:
                        seen.add(key)
                        cycles.append(cycle)
                elif state == white:
                    visit(dependency_id, path)
            path.pop()
            colour[component_id] = black

        for component in components:
            if colour[component.component_id] == white:
                visit(component.component_id, [])
        return cycles
