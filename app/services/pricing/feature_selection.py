"""
WorkforceOne Pricing - Feature Selection

Selection normalization and the select/deselect transitions.

- normalize() only ever grows a selection: free features plus the
  transitive dependency closure.
- toggle_feature() is the state transition used by the plan builder:
  selecting pulls in dependencies, deselecting cascades to dependents.
"""

import logging
from collections import deque
from typing import Dict, FrozenSet, Iterable, Iterator, List, Set, Tuple

from app.models.pricing import Feature
from app.utils.error_handling import (
    ConfigurationError,
    CyclicDependencyError,
    UnknownFeatureException,
)

logger = logging.getLogger(__name__)


def index_catalog(catalog: Iterable[Feature]) -> Dict[str, Feature]:
    """Index a catalog by feature id. Duplicate ids are a catalog defect."""
    by_id: Dict[str, Feature] = {}
    for feature in catalog:
        if feature.id in by_id:
            raise ConfigurationError(
                f"Duplicate feature id in catalog: {feature.id}",
                details={"feature_id": feature.id},
            )
        by_id[feature.id] = feature
    return by_id


def _dependencies(by_id: Dict[str, Feature], feature_id: str) -> Iterator[str]:
    feature = by_id.get(feature_id)
    if feature is None:
        return iter(())
    return iter(sorted(feature.dependencies))


def _resolve(root: str, by_id: Dict[str, Feature], resolved: Set[str]) -> None:
    """
    Add root and everything it depends on to resolved.

    Depth-first with an explicit path; meeting an id that is still on the
    path means the catalog has a cycle.
    """
    if root in resolved:
        return

    stack: List[Tuple[str, Iterator[str]]] = [(root, _dependencies(by_id, root))]
    on_path = {root}

    while stack:
        node, pending = stack[-1]
        child = next(pending, None)

        if child is None:
            stack.pop()
            on_path.discard(node)
            resolved.add(node)
            continue

        if child in on_path:
            path = [n for n, _ in stack]
            cycle = path[path.index(child):] + [child]
            logger.error(f"Dependency cycle in feature catalog: {' -> '.join(cycle)}")
            raise CyclicDependencyError(cycle)

        if child in resolved:
            continue

        stack.append((child, _dependencies(by_id, child)))
        on_path.add(child)


def dependency_closure(catalog: Iterable[Feature], feature_ids: Iterable[str]) -> FrozenSet[str]:
    """The given ids plus everything they transitively depend on."""
    by_id = index_catalog(catalog)
    resolved: Set[str] = set()
    for feature_id in sorted(set(feature_ids)):
        _resolve(feature_id, by_id, resolved)
    return frozenset(resolved)


def normalize(catalog: Iterable[Feature], selected: Iterable[str]) -> FrozenSet[str]:
    """
    Return the effective selection for a requested selection.

    1. Every free feature is included unconditionally.
    2. Every member's dependencies are added, transitively.

    Ids that are not in the catalog are kept as-is (the result is always a
    superset of the input) and are never priced.

    Raises:
        CyclicDependencyError: a dependency cycle is reachable from the selection
    """
    catalog = list(catalog)
    requested = set(selected)
    free_ids = {f.id for f in catalog if f.is_free}

    effective = dependency_closure(catalog, requested | free_ids)
    logger.debug(f"Normalized {len(requested)} selected feature(s) to {len(effective)} effective")
    return effective


def dependents_of(catalog: Iterable[Feature], feature_id: str) -> FrozenSet[str]:
    """Every feature that directly or transitively depends on feature_id."""
    reverse: Dict[str, Set[str]] = {}
    for feature in catalog:
        for dependency in feature.dependencies:
            reverse.setdefault(dependency, set()).add(feature.id)

    found: Set[str] = set()
    queue = deque([feature_id])
    while queue:
        current = queue.popleft()
        for dependent in reverse.get(current, ()):
            if dependent not in found and dependent != feature_id:
                found.add(dependent)
                queue.append(dependent)
    return frozenset(found)


def toggle_feature(
    catalog: Iterable[Feature],
    selected: Iterable[str],
    feature_id: str,
) -> FrozenSet[str]:
    """
    Select or deselect a single feature.

    - Free features cannot be toggled; the selection is returned unchanged.
    - Selecting adds the feature and all of its dependencies.
    - Deselecting removes the feature and every feature that depends on it.

    Raises:
        UnknownFeatureException: feature_id is not in the catalog
        CyclicDependencyError: selecting reaches a dependency cycle
    """
    catalog = list(catalog)
    by_id = index_catalog(catalog)
    current = frozenset(selected)

    feature = by_id.get(feature_id)
    if feature is None:
        raise UnknownFeatureException([feature_id])

    if feature.is_free:
        return current

    if feature_id in current:
        removed = {feature_id} | dependents_of(catalog, feature_id)
        logger.debug(f"Deselected {feature_id}; cascading removal of {sorted(removed - {feature_id})}")
        return current - removed

    return current | dependency_closure(catalog, [feature_id])
