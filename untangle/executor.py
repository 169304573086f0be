"""Runs single workflow nodes against a shared execution context."""

from __future__ import annotations

import re
import time
from dataclasses import dataclass, field
from typing import Any

from untangle.http_client import HttpClient, HttpResponse
from untangle.nodes import (
    DelayNode,
    GetVariableNode,
    HttpDeleteNode,
    HttpGetNode,
    HttpPostNode,
    HttpPutNode,
    LogNode,
    Node,
    SetVariableNode,
    StartNode,
)
from untangle.terminal import Terminal

BODY_PREVIEW = 200
VARIABLE_PREVIEW = 100
_TRIM = " \t\r"
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class ExecutionContext:
    """State shared by the nodes of one run."""

    variables: dict[str, Any] = field(default_factory=dict)
    http_client: HttpClient = field(default_factory=HttpClient)
    last_response_body: str = ""
    last_status_code: int = 0
    execution_log: str = ""
    terminal: Terminal | None = None

    def set_variable(self, name: str, value: Any) -> None:
        self.variables[name] = value

    def get_variable(self, name: str) -> Any:
        """Return the variable's value, or None when it is not set."""
        return self.variables.get(name)

    def has_variable(self, name: str) -> bool:
        return name in self.variables

    def log(self, message: str) -> None:
        """Record a message in the run log, on stdout and in the terminal."""
        self.execution_log += message + "\n"
        line = "[EXEC] " + message
        print(line, flush=True)
        if self.terminal is not None:
            self.terminal.log(line)


def parse_headers(text: str) -> dict[str, str]:
    """Parse ``Key: value`` lines; lines without a colon are ignored."""
    headers: dict[str, str] = {}
    for line in text.split("\n"):
        if not line or line == "\r":
            continue
        key, sep, value = line.partition(":")
        if sep:
            headers[key.strip(_TRIM)] = value.strip(_TRIM)
    return headers


def _parse_leading_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"invalid delay: {text!r}")
    return int(match.group(1))


def _preview(text: str, limit: int) -> str:
    return text[:limit] + ("..." if len(text) > limit else "")


def _record_response(
    context: ExecutionContext, response: HttpResponse, *, show_body: bool
) -> bool:
    if not response.success:
        context.log("ERROR: " + response.error_message)
        return False
    context.last_response_body = response.body
    context.last_status_code = response.status_code
    context.log(f"Response: Status {response.status_code}")
    if show_body:
        context.log("Body: " + _preview(response.body, BODY_PREVIEW))
    return True


def execute(node: Node | None, context: ExecutionContext) -> bool:
    """Run one node and report whether it succeeded.

    Raises ValueError when a delay node holds no number.
    """
    if node is None:
        return False

    node_type = node.node_type
    context.log(f"Executing node: {node_type} (ID: {node.id})")

    if isinstance(node, StartNode):
        context.log("Starting workflow execution")
        return True

    if isinstance(node, HttpGetNode):
        context.log("GET Request to: " + node.url)
        response = context.http_client.get(node.url, parse_headers(node.headers))
        return _record_response(context, response, show_body=True)

    if isinstance(node, HttpPostNode):
        context.log("POST Request to: " + node.url)
        response = context.http_client.post(
            node.url, node.body, parse_headers(node.headers)
        )
        return _record_response(context, response, show_body=True)

    if isinstance(node, HttpPutNode):
        context.log("PUT Request to: " + node.url)
        response = context.http_client.put(
            node.url, node.body, parse_headers(node.headers)
        )
        return _record_response(context, response, show_body=True)

    if isinstance(node, HttpDeleteNode):
        context.log("DELETE Request to: " + node.url)
        response = context.http_client.delete(node.url, parse_headers(node.headers))
        return _record_response(context, response, show_body=False)

    if isinstance(node, SetVariableNode):
        value = context.last_response_body
        context.set_variable(node.var_name, value)
        context.log(f"Set variable '{node.var_name}' = {value[:VARIABLE_PREVIEW]}")
        return True

    if isinstance(node, GetVariableNode):
        name = node.var_name
        if not context.has_variable(name):
            context.log(f"ERROR: Variable '{name}' not found")
            return False
        value = context.get_variable(name)
        if not isinstance(value, str):
            context.log(f"ERROR: Variable '{name}' is not a string")
            return False
        context.log(f"Get variable '{name}' = {value[:VARIABLE_PREVIEW]}")
        context.last_response_body = value
        return True

    if isinstance(node, LogNode):
        context.log("LOG: " + node.message)
        return True

    if isinstance(node, DelayNode):
        delay_ms = _parse_leading_int(node.delay_ms)
        context.log(f"Delaying for {delay_ms}ms")
        time.sleep(max(delay_ms, 0) / 1000)
        return True

    context.log(f"WARNING: Node type '{node_type}' has no executor, skipping")
    return True