"""Minimal immutable UI tree used by the card and page builders."""

from dataclasses import dataclass, field


class Raw(str):
    """Text emitted without escaping (inline script bodies)."""


@dataclass(frozen=True)
class Node:
    tag: str
    attrs: dict[str, str] = field(default_factory=dict)
    children: tuple["Node | str", ...] = ()

    @property
    def classes(self) -> list[str]:
        return self.attrs.get("class", "").split()

    def text(self) -> str:
        """Concatenated text of this node and its descendants."""
        parts = []
        for child in self.children:
            parts.append(child.text() if isinstance(child, Node) else str(child))
        return "".join(parts)

    def find_all(self, class_name: str) -> list["Node"]:
        """Depth-first list of descendants (and self) carrying a CSS class."""
        found = [self] if class_name in self.classes else []
        for child in self.children:
            if isinstance(child, Node):
                found.extend(child.find_all(class_name))
        return found

    def find(self, class_name: str) -> "Node | None":
        matches = self.find_all(class_name)
        return matches[0] if matches else None


def el(tag: str, *children: "Node | str | None", **attrs: str | None) -> Node:
    """Build a Node. `class_` maps to `class`; None children and attrs are dropped."""
    clean_attrs = {}
    for key, value in attrs.items():
        if value is None:
            continue
        name = key.rstrip("_").replace("_", "-")
        clean_attrs[name] = str(value)
    return Node(
        tag=tag,
        attrs=clean_attrs,
        children=tuple(c for c in children if c is not None),
    )
