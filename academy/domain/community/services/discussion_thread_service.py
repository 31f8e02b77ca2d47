"""Domain service for assembling a lesson's discussion forest."""

from collections import defaultdict
from dataclasses import dataclass, field

from academy.domain.common.exceptions import ValidationError
from academy.domain.community.entities.discussion import Discussion
from academy.domain.community.exceptions import DiscussionCycleError


@dataclass
class ThreadNode:
    """A discussion with its ordered replies."""

    discussion: Discussion
    replies: list["ThreadNode"] = field(default_factory=list)

    def walk(self) -> list[Discussion]:
        """Depth-first, pre-order listing of this subtree."""
        result = [self.discussion]
        for reply in self.replies:
            result.extend(reply.walk())
        return result


def _sort_key(discussion: Discussion) -> tuple:
    return (discussion.created_at, discussion.id.value)


class DiscussionThreadService:
    """Builds the forest of one lesson from its flat list of nodes.

    Roots are ordered by (created_at, id), and so are the replies under each
    parent, so the same rows always produce the same thread.
    """

    def build_forest(self, discussions: list[Discussion]) -> list[ThreadNode]:
        """
        Assemble the forest.

        Args:
            discussions: Every node of a single lesson

        Returns:
            Root nodes with nested replies

        Raises:
            DiscussionCycleError: If a node is reachable from itself
            ValidationError: If a node's parent is outside the given lesson
        """
        by_id = {d.id.value: d for d in discussions}
        children: dict[int, list[Discussion]] = defaultdict(list)
        roots: list[Discussion] = []
        for discussion in discussions:
            if discussion.parent_id is None:
                roots.append(discussion)
            else:
                children[discussion.parent_id.value].append(discussion)

        visited: set[int] = set()
        forest = [
            self._build_node(root, children, visited) for root in sorted(roots, key=_sort_key)
        ]

        if len(visited) != len(by_id):
            unreachable = sorted(set(by_id) - visited)
            self._raise_for_unreachable(unreachable[0], by_id)
        return forest

    def _build_node(
        self,
        discussion: Discussion,
        children: dict[int, list[Discussion]],
        visited: set[int],
    ) -> ThreadNode:
        # Iterative so deep threads cannot hit the recursion limit
        root = ThreadNode(discussion)
        visited.add(discussion.id.value)
        stack = [root]
        while stack:
            node = stack.pop()
            for child in sorted(children.get(node.discussion.id.value, []), key=_sort_key):
                if child.id.value in visited:
                    raise DiscussionCycleError(child.id.value)
                visited.add(child.id.value)
                child_node = ThreadNode(child)
                node.replies.append(child_node)
                stack.append(child_node)
        return root

    def _raise_for_unreachable(self, start: int, by_id: dict[int, Discussion]) -> None:
        seen: set[int] = set()
        current: int | None = start
        while current is not None:
            if current in seen:
                raise DiscussionCycleError(current)
            seen.add(current)
            discussion = by_id.get(current)
            if discussion is None:
                raise ValidationError(
                    f"Discussion {current} is not part of this lesson",
                    field="parent_id",
                    value=current,
                )
            current = discussion.parent_id.value if discussion.parent_id else None
        raise DiscussionCycleError(start)
