"""Declarative settings tree handed to the editor host.

The tree is a read-only projection of the panel config: nodes hold labelled
fields and node-level actions, and a field's address is the chain of node keys
leading to it followed by its own key (e.g. ``("paths", "0", "slope")``).
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple


@dataclass(frozen=True)
class SelectOption:
    label: str
    value: str


@dataclass(frozen=True)
class SettingsTreeField:
    label: str
    input: str                                  # "number", "select" or "string"
    value: Any = None                           # None for an unbounded number
    options: Optional[Tuple[SelectOption, ...]] = None
    min: Optional[float] = None
    placeholder: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out = {"label": self.label, "input": self.input, "value": self.value}
        if self.options is not None:
            out["options"] = [{"label": o.label, "value": o.value} for o in self.options]
        if self.min is not None:
            out["min"] = self.min
        if self.placeholder is not None:
            out["placeholder"] = self.placeholder
        return out


@dataclass(frozen=True)
class SettingsTreeAction:
    id: str
    label: str
    display: str = "inline"
    icon: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out = {"type": "action", "id": self.id, "label": self.label, "display": self.display}
        if self.icon is not None:
            out["icon"] = self.icon
        return out


@dataclass(frozen=True)
class SettingsTreeNode:
    label: str
    fields: Mapping[str, SettingsTreeField] = field(default_factory=dict)
    children: Mapping[str, "SettingsTreeNode"] = field(default_factory=dict)
    actions: Tuple[SettingsTreeAction, ...] = ()

    def __post_init__(self):
        # Nodes are cached and shared between trees, so keep them read-only.
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))
        object.__setattr__(self, "children", MappingProxyType(dict(self.children)))
        object.__setattr__(self, "actions", tuple(self.actions))

    def action_ids(self) -> Tuple[str, ...]:
        return tuple(a.id for a in self.actions)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"label": self.label}
        if self.fields:
            out["fields"] = {k: f.to_dict() for k, f in self.fields.items()}
        if self.children:
            out["children"] = {k: c.to_dict() for k, c in self.children.items()}
        if self.actions:
            out["actions"] = [a.to_dict() for a in self.actions]
        return out


def tree_to_dict(tree: Mapping[str, SettingsTreeNode]) -> Dict[str, Any]:
    return {key: node.to_dict() for key, node in tree.items()}


def _walk(prefix: Tuple[str, ...], node: SettingsTreeNode):
    for key, f in node.fields.items():
        yield prefix + (key,), f
    for key, child in node.children.items():
        yield from _walk(prefix + (key,), child)


def iter_field_addresses(tree: Mapping[str, SettingsTreeNode]) -> Iterator[Tuple[Tuple[str, ...], SettingsTreeField]]:
    """Yield (address, field) for every field in the tree, in tree order."""
    for key, node in tree.items():
        yield from _walk((key,), node)
