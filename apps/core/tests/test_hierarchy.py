from dataclasses import dataclass
from typing import Optional

from django.test import SimpleTestCase

from apps.core.domain.forest import build_forest
from apps.core.domain.hierarchy import (
    HierarchyRepository,
    apply_to_subtree,
    collect_descendants,
    remove_subtree,
)
from apps.core.errors import NotFoundError, StorageError


@dataclass
class Node:
    id: int
    parent_id: Optional[int] = None
    name: str = ""
    flag: bool = False

    @property
    def display_name(self):
        return self.name or f"node-{self.id}"


class InMemoryRepository(HierarchyRepository):
    """Repozytorium w pamięci, odrzuca usunięcie węzła z dziećmi (jak PROTECT)."""

    kind = "node"

    def __init__(self, nodes, fail_on_delete=None):
        self.nodes = {n.id: n for n in nodes}
        self.deleted = []
        self.fail_on_delete = fail_on_delete

    def get_by_id(self, entity_id):
        if entity_id not in self.nodes:
            raise NotFoundError("node", entity_id)
        return self.nodes[entity_id]

    def list_by_parent(self, parent_id):
        return [n for n in self.nodes.values() if n.parent_id == parent_id]

    def delete(self, entity_id):
        if entity_id == self.fail_on_delete:
            raise StorageError("disk full", operation="delete", entity_id=entity_id)
        if entity_id not in self.nodes:
            raise NotFoundError("node", entity_id)
        if self.list_by_parent(entity_id):
            raise StorageError("still referenced", operation="delete", entity_id=entity_id)
        del self.nodes[entity_id]
        self.deleted.append(entity_id)


def sample_tree():
    # 1 -> (2 -> 4, 3), 5 osobno
    return [Node(1), Node(2, 1), Node(3, 1), Node(4, 2), Node(5)]


class RemoveSubtreeTests(SimpleTestCase):

    def test_removes_three_levels_leaves_first(self):
        repo = InMemoryRepository([Node(1), Node(2, 1), Node(3, 2)])
        removed = remove_subtree(repo, 1)

        self.assertEqual(removed, [3, 2, 1])
        for node_id in (1, 2, 3):
            with self.assertRaises(NotFoundError):
                repo.get_by_id(node_id)

    def test_children_processed_in_listed_order(self):
        repo = InMemoryRepository(sample_tree())
        self.assertEqual(remove_subtree(repo, 1), [4, 2, 3, 1])
        self.assertEqual(list(repo.nodes), [5])

    def test_single_node(self):
        repo = InMemoryRepository(sample_tree())
        self.assertEqual(remove_subtree(repo, 5), [5])
        self.assertIn(1, repo.nodes)

    def test_missing_root_raises_not_found(self):
        repo = InMemoryRepository(sample_tree())
        with self.assertRaises(NotFoundError):
            remove_subtree(repo, 99)

    def test_failure_aborts_and_keeps_already_removed(self):
        repo = InMemoryRepository(sample_tree(), fail_on_delete=2)

        with self.assertRaises(StorageError) as ctx:
            remove_subtree(repo, 1)

        self.assertEqual(ctx.exception.entity_id, 2)
        self.assertEqual(ctx.exception.operation, "delete")
        # 4 zdążył zniknąć, reszta poddrzewa została
        self.assertEqual(repo.deleted, [4])
        self.assertIn(1, repo.nodes)
        self.assertIn(3, repo.nodes)

    def test_before_delete_runs_for_each_node(self):
        repo = InMemoryRepository(sample_tree())
        seen = []
        remove_subtree(repo, 1, before_delete=seen.append)
        self.assertEqual(seen, [4, 2, 3, 1])


class ApplyToSubtreeTests(SimpleTestCase):

    def flip(self, node):
        node.flag = not node.flag
        return node.id

    def test_non_recursive_touches_only_root(self):
        repo = InMemoryRepository(sample_tree())
        self.assertEqual(apply_to_subtree(repo, 1, self.flip, recursive=False), [1])
        self.assertTrue(repo.nodes[1].flag)
        self.assertFalse(repo.nodes[2].flag)

    def test_recursive_is_preorder_and_flips_independently(self):
        nodes = sample_tree()
        nodes[1].flag = True  # węzeł 2 już "zrobiony"
        repo = InMemoryRepository(nodes)

        self.assertEqual(apply_to_subtree(repo, 1, self.flip), [1, 2, 4, 3])
        self.assertTrue(repo.nodes[1].flag)
        self.assertFalse(repo.nodes[2].flag)
        self.assertTrue(repo.nodes[4].flag)
        self.assertFalse(repo.nodes[5].flag)

    def test_cycle_does_not_loop_forever(self):
        repo = InMemoryRepository([Node(1, 2), Node(2, 1)])
        self.assertEqual(apply_to_subtree(repo, 1, self.flip), [1, 2])


class CollectDescendantsTests(SimpleTestCase):

    def test_breadth_first(self):
        repo = InMemoryRepository(sample_tree())
        self.assertEqual(collect_descendants(repo, 1), [2, 3, 4])
        self.assertEqual(collect_descendants(repo, 3), [])


class BuildForestTests(SimpleTestCase):

    def test_reconstructs_parent_child_layout(self):
        forest = build_forest([Node(1), Node(2, 1), Node(3, 1), Node(4, 2)])

        self.assertEqual([r.id for r in forest.roots], [1])
        root = forest.roots[0]
        self.assertEqual([c.id for c in root.children], [2, 3])
        self.assertEqual([c.id for c in root.children[0].children], [4])
        self.assertTrue(root.children[1].is_leaf())
        self.assertEqual(forest.orphans, [])

    def test_roots_keep_input_order(self):
        forest = build_forest([Node(7), Node(3), Node(5, 3)])
        self.assertEqual([r.id for r in forest], [7, 3])

    def test_orphan_is_neither_child_nor_root(self):
        orphan = Node(6, 42)
        forest = build_forest([Node(1), orphan])

        self.assertEqual([r.id for r in forest.roots], [1])
        self.assertEqual(forest.roots[0].children, [])
        self.assertEqual(forest.orphans, [orphan])

    def test_empty_input(self):
        forest = build_forest([])
        self.assertEqual(len(forest), 0)
