"""Per-orchestration node graphs: editing, persistence data and execution."""

from __future__ import annotations

from dataclasses import dataclass, field

from untangle.executor import ExecutionContext, execute
from untangle.link import Link
from untangle.nodes import Node, StartNode, create_node
from untangle.terminal import Terminal

FIRST_NODE_ID = 1
NODE_ID_STEP = 10
FIRST_LINK_ID = 10000
MAX_ITERATIONS = 100


@dataclass
class NodeData:
    """A node as stored in the database."""

    id: int
    orchestration_id: int
    type: str
    pos_x: float
    pos_y: float


@dataclass
class LinkData:
    """A link as stored in the database."""

    id: int
    orchestration_id: int
    start_attr: int
    end_attr: int


@dataclass
class OrchestrationData:
    """The nodes and links of one orchestration, with its id counters."""

    nodes: list[Node] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)
    next_node_id: int = FIRST_NODE_ID
    next_link_id: int = FIRST_LINK_ID

    def find_node(self, node_id: int) -> Node | None:
        return next((n for n in self.nodes if n.id == node_id), None)


def _announce(message: str, terminal: Terminal | None) -> None:
    print(message, flush=True)
    if terminal is not None:
        terminal.log(message)


class NodeEditor:
    """Holds the graph of every orchestration and runs them."""

    def __init__(self, context: ExecutionContext | None = None) -> None:
        self._orchestrations: dict[int, OrchestrationData] = {}
        self.execution_context = context if context is not None else ExecutionContext()

    @property
    def execution_log(self) -> str:
        """The log of the most recent run."""
        return self.execution_context.execution_log

    def orchestration(self, orchestration_id: int) -> OrchestrationData:
        """Return the graph of an orchestration, creating an empty one if needed."""
        return self._orchestrations.setdefault(orchestration_id, OrchestrationData())

    def create_node(
        self,
        orchestration_id: int,
        node_type: str,
        position: tuple[float, float] = (0.0, 0.0),
    ) -> Node:
        """Add a node with the next free id; raise ValueError for an unknown type."""
        data = self.orchestration(orchestration_id)
        node = create_node(node_type, data.next_node_id)
        node.position = (float(position[0]), float(position[1]))
        data.nodes.append(node)
        data.next_node_id += NODE_ID_STEP
        return node

    def create_node_with_id(
        self,
        orchestration_id: int,
        node_id: int,
        node_type: str,
        position: tuple[float, float] = (0.0, 0.0),
    ) -> Node:
        """Add a node with a given id, keeping later ids above it."""
        data = self.orchestration(orchestration_id)
        node = create_node(node_type, node_id)
        node.position = (float(position[0]), float(position[1]))
        data.nodes.append(node)
        if node_id >= data.next_node_id:
            data.next_node_id = node_id + NODE_ID_STEP
        return node

    def add_link(self, orchestration_id: int, start_attr: int, end_attr: int) -> Link:
        """Connect two attributes with a link carrying the next free id."""
        data = self.orchestration(orchestration_id)
        link = Link(data.next_link_id, start_attr, end_attr)
        data.next_link_id += 1
        data.links.append(link)
        return link

    def delete_nodes(self, orchestration_id: int, node_ids) -> None:
        """Remove the given nodes and every link touching their attributes."""
        data = self.orchestration(orchestration_id)
        doomed = set(node_ids)
        kept: list[Node] = []
        for node in data.nodes:
            if node.id not in doomed:
                kept.append(node)
                continue
            attrs = set(node.attribute_ids())
            data.links = [
                link
                for link in data.links
                if link.start_attr not in attrs and link.end_attr not in attrs
            ]
        data.nodes = kept

    def delete_links(self, orchestration_id: int, link_ids) -> None:
        """Remove the links with the given ids."""
        data = self.orchestration(orchestration_id)
        doomed = set(link_ids)
        data.links = [link for link in data.links if link.id not in doomed]

    def all_nodes_data(self) -> list[NodeData]:
        """Every node of every orchestration, ordered by orchestration id."""
        return [
            NodeData(node.id, orch_id, node.node_type, node.position[0], node.position[1])
            for orch_id, data in sorted(self._orchestrations.items())
            for node in data.nodes
        ]

    def all_links_data(self) -> list[LinkData]:
        """Every link of every orchestration, ordered by orchestration id."""
        return [
            LinkData(link.id, orch_id, link.start_attr, link.end_attr)
            for orch_id, data in sorted(self._orchestrations.items())
            for link in data.links
        ]

    def load_nodes_data(self, nodes_data) -> None:
        """Recreate stored nodes; entries of unknown type are skipped."""
        for item in nodes_data:
            self.orchestration(item.orchestration_id)
            try:
                self.create_node_with_id(
                    item.orchestration_id, item.id, item.type, (item.pos_x, item.pos_y)
                )
            except ValueError:
                continue

    def load_links_data(self, links_data) -> None:
        """Recreate stored links of orchestrations that already exist."""
        for item in links_data:
            data = self._orchestrations.get(item.orchestration_id)
            if data is None:
                continue
            data.links.append(Link(item.id, item.start_attr, item.end_attr))
            if item.id >= data.next_link_id:
                data.next_link_id = item.id + 1

    def execute_selected_node(
        self, selected_node_ids, terminal: Terminal | None = None
    ) -> bool:
        """Run the first selected node alone; return whether it ran and succeeded."""
        selected = list(selected_node_ids)
        if not selected:
            _announce("No node selected", terminal)
            return False

        target = selected[0]
        for _, data in sorted(self._orchestrations.items()):
            node = data.find_node(target)
            if node is None:
                continue
            _announce("\n=== Executing Single Node ===", terminal)
            self.execution_context.execution_log = ""
            self.execution_context.terminal = terminal
            success = execute(node, self.execution_context)
            _announce("Execution " + ("SUCCESS" if success else "FAILED"), terminal)
            _announce("=== End Execution ===\n", terminal)
            return success

        _announce("Selected node not found", terminal)
        return False

    def execute_orchestration(
        self, orchestration_id: int, terminal: Terminal | None = None
    ) -> list[int]:
        """Run the chain that starts at the Start node; return the ids run."""
        data = self._orchestrations.get(orchestration_id)
        if data is None:
            _announce("Orchestration not found", terminal)
            return []

        _announce("\n=== Executing Full Orchestration ===", terminal)
        context = self.execution_context
        context.execution_log = ""
        context.variables.clear()
        context.terminal = terminal

        start = next((n for n in data.nodes if isinstance(n, StartNode)), None)
        if start is None:
            _announce("ERROR: No Start node found in orchestration", terminal)
            return []

        if not execute(start, context):
            _announce("Start node execution failed", terminal)
            return []

        start_attrs = start.attribute_ids()
        if not start_attrs:
            _announce("Start node has no output", terminal)
            return []

        executed = [start.id]
        done = {start.id}
        current_attr = start_attrs[0]

        for _ in range(MAX_ITERATIONS):
            link = next((l for l in data.links if l.start_attr == current_attr), None)
            if link is None:
                _announce("No more connected nodes, execution complete", terminal)
                break

            next_node = next(
                (
                    n
                    for n in data.nodes
                    if n.id not in done and link.end_attr in n.attribute_ids()
                ),
                None,
            )
            if next_node is None:
                _announce("Could not find next node in chain", terminal)
                break

            if not execute(next_node, context):
                _announce("Node execution failed, stopping", terminal)
                break

            executed.append(next_node.id)
            done.add(next_node.id)

            attrs = next_node.attribute_ids()
            if not attrs:
                break
            current_attr = attrs[-1]

        _announce("=== End Orchestration Execution ===\n", terminal)
        return executed