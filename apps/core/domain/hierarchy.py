# apps/core/domain/hierarchy.py
import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from apps.core.errors import ClidoError

logger = logging.getLogger(__name__)


class HierarchyRepository(ABC):
    """
    Minimalny zestaw operacji potrzebny algorytmom kaskadowym.
    Implementują go repozytoria projektów i zadań.
    """

    kind = "entity"

    @abstractmethod
    def get_by_id(self, entity_id: int):
        pass

    @abstractmethod
    def list_by_parent(self, parent_id: int) -> list:
        """Zwraca tylko bezpośrednie dzieci (jeden poziom)."""
        pass

    @abstractmethod
    def delete(self, entity_id: int) -> None:
        """Usuwa dokładnie jeden wiersz, bez kaskady."""
        pass


def remove_subtree(
    repository: HierarchyRepository,
    root_id: int,
    before_delete: Optional[Callable[[int], None]] = None,
) -> List[int]:
    """
    Usuwa węzeł wraz z całym poddrzewem: liście przed przodkami,
    dzieci w kolejności zwróconej przez repozytorium.
    Zwraca ID usuniętych węzłów w kolejności usuwania.

    Brak transakcji: przy błędzie już usunięte węzły pozostają usunięte,
    a błąd jest przekazywany dalej bez zmian.
    """
    removed: List[int] = []
    visited = set()
    # (id, czy dzieci już zostały rozwinięte)
    stack = [(root_id, False)]

    try:
        while stack:
            node_id, expanded = stack.pop()

            if expanded:
                if before_delete is not None:
                    before_delete(node_id)
                repository.delete(node_id)
                removed.append(node_id)
                continue

            if node_id in visited:
                continue
            visited.add(node_id)

            stack.append((node_id, True))
            children = repository.list_by_parent(node_id)
            for child in reversed(children):
                stack.append((child.id, False))
    except ClidoError as exc:
        logger.error(
            "Removing %s subtree %s aborted: %s (already removed: %s)",
            repository.kind, root_id, exc, removed or "none",
        )
        raise

    logger.info("Removed %s subtree %s (%d node(s))", repository.kind, root_id, len(removed))
    return removed


def apply_to_subtree(
    repository: HierarchyRepository,
    root_id: int,
    action: Callable,
    recursive: bool = True,
) -> list:
    """
    Wywołuje action(entity) dla korzenia, a przy recursive=True także dla
    wszystkich potomków (pre-order). Każdy węzeł jest pobierany na nowo
    przez get_by_id. Zwraca wyniki action w kolejności wywołań.
    """
    results = []
    processed: List[int] = []
    visited = set()
    stack = [root_id]

    try:
        while stack:
            node_id = stack.pop()
            if node_id in visited:
                continue
            visited.add(node_id)

            entity = repository.get_by_id(node_id)
            results.append(action(entity))
            processed.append(node_id)

            if recursive:
                children = repository.list_by_parent(node_id)
                stack.extend(child.id for child in reversed(children))
    except ClidoError as exc:
        logger.error(
            "Cascade on %s subtree %s aborted: %s (already processed: %s)",
            repository.kind, root_id, exc, processed or "none",
        )
        raise

    return results


def collect_descendants(repository: HierarchyRepository, root_id: int) -> List[int]:
    """Wszystkie ID potomków (BFS), bez samego korzenia."""
    descendants: List[int] = []
    seen = {root_id}
    queue = [root_id]

    while queue:
        current = queue.pop(0)
        for child in repository.list_by_parent(current):
            if child.id in seen:
                continue
            seen.add(child.id)
            descendants.append(child.id)
            queue.append(child.id)

    return descendants
