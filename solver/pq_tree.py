"""PQ-Baum für zulässige Reihenfolgen von Sections.

Knotentypen:
  - P-Knoten: alle Blätter darunter dürfen beliebig permutiert werden
  - Q-Knoten: Kinder-Reihenfolge fest, nur als Ganzes umkehrbar
  - Blatt:    ein Label (kanonische Section-Beschreibung)

Eine Frontier ist eine konkrete Blatt-Reihenfolge. get_frontiers() zählt
alle zulässigen Frontiers auf; reduce() schränkt sie auf Reihenfolgen ein,
in denen eine Teilmenge zusammenhängend steht.
"""

import logging
import random
from collections import deque
from enum import Enum
from itertools import chain
from typing import Callable, Iterable, Iterator, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)


class NodeType(str, Enum):
    P_NODE = "P"
    Q_NODE = "Q"
    LEAF = "LEAF"


class PQNode:
    """Knoten im PQ-Baum. Eltern besitzen ihre Kinder, keine Rückverweise."""

    def __init__(
        self,
        node_type: NodeType,
        label: str = "",
        children: Optional[list["PQNode"]] = None,
    ) -> None:
        self.type = node_type
        self.label = label
        self.children: list[PQNode] = list(children or [])
        self.position: tuple[int, int] = (0, 0)  # nur für Layout/Anzeige

    def add_child(self, child: "PQNode") -> "PQNode":
        if self.is_leaf:
            raise ValueError(f"Blatt '{self.label}' kann keine Kinder haben.")
        self.children.append(child)
        return child

    @property
    def is_leaf(self) -> bool:
        return self.type == NodeType.LEAF

    def leaves(self) -> list[str]:
        """Aktuelle Blatt-Reihenfolge dieses Teilbaums (links nach rechts)."""
        if self.is_leaf:
            return [self.label]
        return list(chain.from_iterable(child.leaves() for child in self.children))

    def __repr__(self) -> str:
        if self.is_leaf:
            return f"PQNode(LEAF, {self.label!r})"
        return f"PQNode({self.type.value}, {len(self.children)} Kinder)"


# ─── Permutationen ────────────────────────────────────────────────────────────

def distinct_permutations(items: Iterable[str]) -> Iterator[tuple[str, ...]]:
    """Alle verschiedenen Permutationen in lexikographischer Reihenfolge.

    Next-Permutation über die sortierte Folge; doppelte Labels ergeben
    keine doppelten Permutationen.
    """
    seq = sorted(items)
    n = len(seq)
    while True:
        yield tuple(seq)
        i = n - 2
        while i >= 0 and seq[i] >= seq[i + 1]:
            i -= 1
        if i < 0:
            return
        j = n - 1
        while seq[j] <= seq[i]:
            j -= 1
        seq[i], seq[j] = seq[j], seq[i]
        seq[i + 1:] = reversed(seq[i + 1:])


def _is_contiguous(frontier: Sequence[str], subset: frozenset[str]) -> bool:
    positions = [i for i, label in enumerate(frontier) if label in subset]
    if not positions:
        return True
    return positions[-1] - positions[0] + 1 == len(positions)


def _enumerate(node: PQNode) -> Iterator[tuple[str, ...]]:
    """Frontiers eines Teilbaums, ohne Deduplizierung auf Baumebene."""
    if node.is_leaf:
        yield (node.label,)
        return

    if node.type == NodeType.P_NODE:
        # Jede Kombination der Kinder-Frontiers ergibt dieselbe Blatt-Multimenge,
        # daher genügt eine Permutationsaufzählung über alle Blätter.
        yield from distinct_permutations(node.leaves())
        return

    # Nur die Kinder-Reihenfolge als Block, innere Anordnungen bleiben fest
    forward = tuple(node.leaves())
    yield forward
    backward = forward[::-1]
    if backward != forward:
        yield backward


# ─── PQ-Baum ──────────────────────────────────────────────────────────────────

class PQTree:
    """PQ-Baum mit Frontier-Aufzählung.

    Verwendung:
        tree = PQTree.build_time_ordered_tree(sections, catalog.describe_section)
        for frontier in tree.get_frontiers(limit=1000):
            ...
    """

    def __init__(self, root: Optional[PQNode] = None) -> None:
        self.root = root
        # Durch reduce() registrierte Teilmengen, die zusammenhängend bleiben müssen
        self._constraints: list[frozenset[str]] = []

    # ─── Aufbau ───────────────────────────────────────────────────────────────

    @staticmethod
    def create_leaf(label: str) -> PQNode:
        return PQNode(NodeType.LEAF, label)

    @staticmethod
    def create_p_node(label: str = "") -> PQNode:
        return PQNode(NodeType.P_NODE, label)

    @staticmethod
    def create_q_node(label: str = "") -> PQNode:
        return PQNode(NodeType.Q_NODE, label)

    def set_root(self, node: Optional[PQNode]) -> None:
        self.root = node
        self._constraints = []

    @classmethod
    def from_universal_set(cls, labels: Iterable[str]) -> "PQTree":
        """Wurzel-P-Knoten mit einem Blatt je Element (alle Reihenfolgen zulässig)."""
        root = cls.create_p_node()
        for label in labels:
            root.add_child(cls.create_leaf(label))
        return cls(root)

    @classmethod
    def build_time_ordered_tree(
        cls,
        sections: Sequence,
        describe: Callable[..., str],
    ) -> "PQTree":
        """Ein Q-Knoten mit den Sections nach (Tag, Startzeit) sortiert.

        Sections ohne Tag stehen hinten, ohne Startzeit vorn im Tag.
        Leere Eingabe ergibt einen leeren Baum (keine Frontiers).
        """
        if not sections:
            return cls()

        def sort_key(section) -> tuple[int, int]:
            slot = section.time_slot
            start = slot.start_minutes
            return (int(slot.day), -1 if start is None else start)

        q_node = cls.create_q_node("Zeitfolge")
        for section in sorted(sections, key=sort_key):
            q_node.add_child(cls.create_leaf(describe(section)))
        return cls(q_node)

    @classmethod
    def build_grouped_tree(
        cls,
        groups: Mapping[str, Sequence[str]],
        label: str = "Stundenplan",
    ) -> "PQTree":
        """Wurzel-P-Knoten, darunter je Gruppe ein P-Knoten mit einem Q-Knoten.

        Beispiel: {"CS101": ["CS101-1", "CS101-2"]} ergibt
        P(Stundenplan) → P(CS101) → Q(Sections CS101) → Blätter.
        Gruppen ohne Labels werden übersprungen; ohne Labels bleibt der Baum leer.
        """
        root = cls.create_p_node(label)
        for name, labels in groups.items():
            if not labels:
                continue
            group_node = root.add_child(cls.create_p_node(name))
            q_node = group_node.add_child(cls.create_q_node(f"Sections {name}"))
            for leaf_label in labels:
                q_node.add_child(cls.create_leaf(leaf_label))
        if not root.children:
            return cls()
        return cls(root)

    # ─── Frontiers ────────────────────────────────────────────────────────────

    def get_frontier(self) -> list[str]:
        """Aktuelle Blatt-Reihenfolge (eine einzelne Frontier)."""
        if self.root is None:
            return []
        return self.root.leaves()

    def iter_frontiers(self) -> Iterator[tuple[str, ...]]:
        """Zulässige, nicht-leere Frontiers ohne Deduplizierung."""
        if self.root is None:
            return
        for frontier in _enumerate(self.root):
            if not frontier:
                continue
            if all(_is_contiguous(frontier, c) for c in self._constraints):
                yield frontier

    def get_frontiers(self, limit: Optional[int] = None) -> list[list[str]]:
        """Alle zulässigen Frontiers, dedupliziert und lexikographisch sortiert.

        Args:
            limit: Abbruch nach so vielen verschiedenen Frontiers (None = alle)
        """
        seen: set[tuple[str, ...]] = set()
        for frontier in self.iter_frontiers():
            if frontier in seen:
                continue
            if limit is not None and len(seen) >= limit:
                logger.warning(
                    f"Frontier-Aufzählung nach {limit} Anordnungen abgebrochen"
                )
                break
            seen.add(frontier)
        return [list(f) for f in sorted(seen)]

    # ─── Operationen ──────────────────────────────────────────────────────────

    @property
    def constraints(self) -> list[frozenset[str]]:
        return list(self._constraints)

    def reduce(self, subset: Iterable[str]) -> bool:
        """Schränkt den Baum auf Frontiers ein, in denen `subset` zusammenhängt.

        Gibt False zurück (Baum unverändert), wenn ein Label unbekannt ist
        oder keine zulässige Frontier die Bedingung erfüllt.
        """
        wanted = frozenset(subset)
        if not wanted:
            return True
        if self.root is None:
            return False
        known = set(self.root.leaves())
        if not wanted <= known:
            logger.debug(f"reduce: unbekannte Labels {sorted(wanted - known)}")
            return False

        for frontier in self.iter_frontiers():
            if _is_contiguous(frontier, wanted):
                if wanted not in self._constraints:
                    self._constraints.append(wanted)
                return True
        return False

    def reorder(self, rng: Optional[random.Random] = None) -> None:
        """Zufällige, zulässige Umordnung: P-Kinder mischen, Q-Kinder ggf. umkehren."""
        if self.root is None:
            return
        rng = rng or random.Random()
        stack = [self.root]
        while stack:
            node = stack.pop()
            if node.type == NodeType.P_NODE:
                rng.shuffle(node.children)
            elif node.type == NodeType.Q_NODE and rng.random() < 0.5:
                node.children.reverse()
            stack.extend(node.children)

    # ─── Anzeige ──────────────────────────────────────────────────────────────

    def compute_layout(
        self, level_height: int = 80, node_width: int = 60,
    ) -> dict[int, list[PQNode]]:
        """Ebenenweises Layout; setzt node.position und liefert Ebene → Knoten."""
        levels: dict[int, list[PQNode]] = {}
        if self.root is None:
            return levels

        queue = deque([(self.root, 0)])
        while queue:
            node, level = queue.popleft()
            levels.setdefault(level, []).append(node)
            for child in node.children:
                queue.append((child, level + 1))

        for level, nodes in levels.items():
            start_x = -(len(nodes) * node_width) // 2
            for i, node in enumerate(nodes):
                node.position = (start_x + i * node_width, level * level_height)
        return levels

    def render(self) -> str:
        """Eingerückte Textdarstellung des Baums."""
        if self.root is None:
            return "(leer)"
        lines: list[str] = []

        def walk(node: PQNode, depth: int) -> None:
            indent = "  " * depth
            if node.is_leaf:
                lines.append(f"{indent}Leaf: {node.label}")
                return
            title = f"[{node.type.value}]"
            if node.label:
                title += f" {node.label}"
            lines.append(indent + title)
            for child in node.children:
                walk(child, depth + 1)

        walk(self.root, 0)
        return "\n".join(lines)
