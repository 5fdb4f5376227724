# apps/core/presentation/trees.py
from rich.text import Text
from rich.tree import Tree

from apps.core.domain.forest import Forest, TreeNode
from apps.core.presentation.formatting import format_date, priority_label


def _node_label(node: TreeNode) -> str:
    return f"{node.display_name} (ID: {node.id})"


def _task_label(node: TreeNode) -> Text:
    task = node.entity
    return Text("\n".join([
        _node_label(node),
        f"Description: {task.description}",
        "Due Date: {}, Completed: {}, Priority: {}".format(
            format_date(task.due_date),
            str(task.task_completed).lower(),
            priority_label(task.priority),
        ),
    ]))


def forest_tree(forest: Forest, title: str, label_for=None) -> Tree:
    """Każdy korzeń lasu jako osobna gałąź; ostatnie dziecko rysowane '└──'."""
    label_for = label_for or (lambda node: Text(_node_label(node)))
    tree = Tree(title, hide_root=True)

    # Jawny stos zamiast rekurencji: głębokość drzewa nie ma limitu
    stack = [(tree, root) for root in reversed(forest.roots)]
    while stack:
        parent, node = stack.pop()
        branch = parent.add(label_for(node))
        stack.extend((branch, child) for child in reversed(node.children))
    return tree


def project_tree(forest: Forest) -> Tree:
    return forest_tree(forest, "Projects")


def task_tree(forest: Forest) -> Tree:
    return forest_tree(forest, "Tasks", label_for=_task_label)
