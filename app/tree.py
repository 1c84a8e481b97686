import html
import weakref
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence

from app.schemas.post import Post
from app.tags import TAG_PATH_SEPARATOR


@dataclass(eq=False)
class Node:
    """
    One segment of the folder tree built from `_dir:` tags.

    Children are owned by their parent. The parent link is a weak reference
    and only used to walk back up the tree.
    """

    label: str = ""
    value: List[Post] = field(default_factory=list)
    children: List["Node"] = field(default_factory=list)
    _parent: Optional[weakref.ReferenceType] = field(
        default=None, repr=False, compare=False
    )

    @property
    def parent(self) -> Optional["Node"]:
        """The parent node while the tree's root is still referenced."""
        return self._parent() if self._parent is not None else None

    def root(self) -> "Node":
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def full_name(self) -> str:
        """
        Path of the node from (but excluding) the unlabeled root.
        The caller must keep the root alive; once it is collected the walk
        stops early and the path is cut short.
        """
        names = []
        node: Optional[Node] = self
        while node is not None and node.parent is not None:
            names.append(node.label)
            node = node.parent
        return TAG_PATH_SEPARATOR.join(reversed(names))

    def child(self, label: str) -> Optional["Node"]:
        for child in self.children:
            if child.label == label:
                return child
        return None

    def add_child(self, label: str) -> "Node":
        child = Node(label=label)
        child._parent = weakref.ref(self)
        self.children.append(child)
        return child

    def new_or_existing(self, path: str) -> "Node":
        """
        Return the node at `path` below this one, creating any missing nodes
        on the way. Calling it again with the same path returns the same node.
        """
        node = self
        for label in split_path(path):
            match = node.child(label)
            node = match if match is not None else node.add_child(label)
        return node

    def search(self, path: str) -> Optional["Node"]:
        node = self
        for label in split_path(path):
            node = node.child(label)
            if node is None:
                return None
        return node

    def walk(self) -> Iterator["Node"]:
        """Pre-order traversal starting with this node."""
        yield self
        for child in self.children:
            yield from child.walk()

    def unpack_html(self, dir_class: str = "", post_class: str = "") -> str:
        """Render the tree as nested lists, directories before posts."""
        lines = ["<ul>"]
        self._unpack_html(lines, 1, dir_class, post_class)
        lines.append("</ul>")
        return "\n".join(lines) + "\n"

    def _unpack_html(
        self, lines: List[str], depth: int, dir_class: str, post_class: str
    ) -> None:
        prefix = "  " * depth
        lines.append(
            f'{prefix}<li class="{html.escape(dir_class)}">{html.escape(self.label)}'
        )

        if self.children:
            lines.append(f"{prefix}  <ul>")
            for child in self.children:
                child._unpack_html(lines, depth + 2, dir_class, post_class)
            lines.append(f"{prefix}  </ul>")

        if self.value:
            lines.append(f"{prefix}  <ul>")
            for post in self.value:
                lines.append(
                    f'{prefix}    <li class="{html.escape(post_class)}">'
                    f"{html.escape(post.title)}</li>"
                )
            lines.append(f"{prefix}  </ul>")

        lines.append(f"{prefix}</li>")


def split_path(path: str) -> List[str]:
    trimmed = path.strip(TAG_PATH_SEPARATOR)
    if not trimmed:
        return []
    return [part for part in trimmed.split(TAG_PATH_SEPARATOR) if part]


def build_tree(mapping: Dict[str, Sequence[Post]]) -> Node:
    """
    Build a tree from a mapping of `/`-separated paths to posts.
    The root has no label. Keys are visited in sorted order so sibling
    order is the same on every build.
    """
    root = Node()
    for key in sorted(mapping):
        node = root.new_or_existing(key)
        node.value = list(mapping[key])
    return root
