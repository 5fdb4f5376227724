# apps/core/domain/forest.py
from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class TreeNode:
    entity: Any
    children: List['TreeNode'] = field(default_factory=list)

    @property
    def id(self) -> int:
        return self.entity.id

    @property
    def display_name(self) -> str:
        return self.entity.display_name

    def is_leaf(self) -> bool:
        return not self.children


@dataclass
class Forest:
    roots: List[TreeNode] = field(default_factory=list)
    # Węzły, których rodzica nie ma na liście wejściowej
    orphans: List[Any] = field(default_factory=list)

    def __iter__(self):
        return iter(self.roots)

    def __len__(self):
        return len(self.roots)


def build_forest(entities: list) -> Forest:
    """
    Odtwarza las z płaskiej listy encji (id, parent_id, display_name).
    Kolejność korzeni i dzieci = kolejność na liście wejściowej.
    Sieroty nie trafiają ani do dzieci, ani do korzeni.
    """
    nodes: Dict[int, TreeNode] = {e.id: TreeNode(entity=e) for e in entities}
    forest = Forest()

    for entity in entities:
        node = nodes[entity.id]
        parent_id = entity.parent_id

        if parent_id is None:
            forest.roots.append(node)
        elif parent_id in nodes and parent_id != entity.id:
            nodes[parent_id].children.append(node)
        else:
            forest.orphans.append(entity)

    return forest
