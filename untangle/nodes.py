"""Workflow node kinds and the attribute (pin) ids they expose."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass
class Node:
    """A node on the editor canvas.

    Attribute ids are derived from the node id: the n-th pin of a node
    has id ``node.id + n``, counting from one.
    """

    id: int
    position: tuple[float, float] = (0.0, 0.0)

    node_type: ClassVar[str] = ""
    title: ClassVar[str] = ""
    pin_labels: ClassVar[tuple[str, ...]] = ()

    def attribute_ids(self) -> list[int]:
        """Return the ids of this node's pins in declaration order."""
        return [self.id + offset for offset in range(1, len(self.pin_labels) + 1)]


@dataclass
class StartNode(Node):
    """Entry point of a workflow."""

    node_type: ClassVar[str] = "Start"
    title: ClassVar[str] = "Start"
    pin_labels: ClassVar[tuple[str, ...]] = ("Flow",)


@dataclass
class HttpGetNode(Node):
    """Sends an HTTP GET request."""

    url: str = "https://jsonplaceholder.typicode.com/posts/1"
    headers: str = ""

    node_type: ClassVar[str] = "HTTP_GET"
    title: ClassVar[str] = "HTTP GET"
    pin_labels: ClassVar[tuple[str, ...]] = ("In", "Response", "Status Code", "Next")


@dataclass
class HttpPostNode(Node):
    """Sends an HTTP POST request with a body."""

    url: str = "https://jsonplaceholder.typicode.com/posts"
    headers: str = "Content-Type: application/json"
    body: str = (
        '{\n"title": "hello world",\n"body": "this is a test post",\n"userId": 1\n}'
    )

    node_type: ClassVar[str] = "HTTP_POST"
    title: ClassVar[str] = "HTTP POST"
    pin_labels: ClassVar[tuple[str, ...]] = (
        "In",
        "Body Data",
        "Response",
        "Status Code",
        "Next",
    )


@dataclass
class HttpPutNode(Node):
    """Sends an HTTP PUT request with a body."""

    url: str = "https://jsonplaceholder.typicode.com/posts/1"
    headers: str = "Content-Type: application/json"
    body: str = (
        '{\n"id": 1,\n"title": "updated title",\n'
        '"body": "this post has been updated",\n"userId": 1\n}'
    )

    node_type: ClassVar[str] = "HTTP_PUT"
    title: ClassVar[str] = "HTTP PUT"
    pin_labels: ClassVar[tuple[str, ...]] = (
        "In",
        "Body Data",
        "Response",
        "Status Code",
        "Next",
    )


@dataclass
class HttpDeleteNode(Node):
    """Sends an HTTP DELETE request."""

    url: str = "https://jsonplaceholder.typicode.com/posts/1"
    headers: str = ""

    node_type: ClassVar[str] = "HTTP_DELETE"
    title: ClassVar[str] = "HTTP DELETE"
    pin_labels: ClassVar[tuple[str, ...]] = ("In", "Response", "Status Code", "Next")


@dataclass
class JsonExtractNode(Node):
    """Extracts a value from a JSON document by path."""

    json_path: str = "$.data.id"

    node_type: ClassVar[str] = "JSON_EXTRACT"
    title: ClassVar[str] = "JSON Extract"
    pin_labels: ClassVar[tuple[str, ...]] = ("JSON", "Value")


@dataclass
class SetVariableNode(Node):
    """Stores a value under a variable name."""

    var_name: str = "user_id"

    node_type: ClassVar[str] = "SET_VARIABLE"
    title: ClassVar[str] = "Set Variable"
    pin_labels: ClassVar[tuple[str, ...]] = ("Value", "Next")


@dataclass
class GetVariableNode(Node):
    """Reads a stored variable."""

    var_name: str = "user_id"

    node_type: ClassVar[str] = "GET_VARIABLE"
    title: ClassVar[str] = "Get Variable"
    pin_labels: ClassVar[tuple[str, ...]] = ("Value",)


@dataclass
class IfConditionNode(Node):
    """Branches on a condition."""

    condition: str = "status_code == 200"

    node_type: ClassVar[str] = "IF_CONDITION"
    title: ClassVar[str] = "If Condition"
    pin_labels: ClassVar[tuple[str, ...]] = ("In", "True", "False")


@dataclass
class DelayNode(Node):
    """Pauses the workflow for a number of milliseconds."""

    delay_ms: str = "1000"

    node_type: ClassVar[str] = "DELAY"
    title: ClassVar[str] = "Delay"
    pin_labels: ClassVar[tuple[str, ...]] = ("In", "Next")


@dataclass
class AssertNode(Node):
    """Checks an assertion and routes to pass or fail."""

    assertion: str = "status_code == 200"

    node_type: ClassVar[str] = "ASSERT"
    title: ClassVar[str] = "Assert"
    pin_labels: ClassVar[tuple[str, ...]] = ("In", "Pass", "Fail")


@dataclass
class LogNode(Node):
    """Writes a message to the execution log."""

    message: str = "Request completed"

    node_type: ClassVar[str] = "LOG"
    title: ClassVar[str] = "Log"
    pin_labels: ClassVar[tuple[str, ...]] = ("In", "Next")


NODE_CLASSES: dict[str, type[Node]] = {
    cls.node_type: cls
    for cls in (
        StartNode,
        HttpGetNode,
        HttpPostNode,
        HttpPutNode,
        HttpDeleteNode,
        JsonExtractNode,
        SetVariableNode,
        GetVariableNode,
        IfConditionNode,
        DelayNode,
        AssertNode,
        LogNode,
    )
}


def create_node(node_type: str, node_id: int) -> Node:
    """Build a node of the named type; raise ValueError for an unknown type."""
    try:
        cls = NODE_CLASSES[node_type]
    except KeyError:
        raise ValueError(f"unknown node type: {node_type!r}") from None
    return cls(node_id)