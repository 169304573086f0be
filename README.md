# untangle

untangle models HTTP API test workflows as graphs of nodes. It runs those
graphs and keeps them in an SQLite database. The package uses only the
standard library.

## Modules

- `untangle.project`: `ProjectManager` holds `Project`s, and each project
  holds named `Orchestration`s. Project ids start at 1. Orchestration ids
  start at 1000 in each project. `add_project_with_id` and
  `add_orchestration_with_id` keep later ids above the ids they are given.
- `untangle.nodes`: the node types are `StartNode`, `HttpGetNode`,
  `HttpPostNode`, `HttpPutNode`, `HttpDeleteNode`, `JsonExtractNode`,
  `SetVariableNode`, `GetVariableNode`, `IfConditionNode`, `DelayNode`,
  `AssertNode` and `LogNode`. Each node has pins, which are its attributes.
  The n-th pin of a node has the id `node.id + n`, and `attribute_ids()`
  lists them. `create_node(node_type, node_id)` builds a node from its type
  name, for example `"Start"`, `"HTTP_GET"` or `"LOG"`. It raises
  `ValueError` for a type it does not know.
- `untangle.link`: `Link` joins an output attribute to an input attribute.
- `untangle.node_editor`: `NodeEditor` keeps one `OrchestrationData` (nodes
  and links) for each orchestration id.
  - `create_node` gives new nodes the ids 1, 11, 21, and so on.
  - `add_link` numbers links from 10000.
  - `delete_nodes` also removes every link that touches the deleted nodes.
  - `delete_links` removes links by id.
  - `all_nodes_data` / `all_links_data` and `load_nodes_data` /
    `load_links_data` convert the graphs to and from `NodeData` and
    `LinkData` records.
- `untangle.executor`: `ExecutionContext` holds the variables, the last
  response body and status code, and the run log. `execute(node, context)`
  runs one node and returns whether it succeeded. `parse_headers` turns
  `Key: value` lines into a dict.
- `untangle.http_client`: `HttpClient` has `get`, `post`, `put`, `delete`
  and `request`. Each returns an `HttpResponse`.
  - `success` is true whenever a response arrived, whatever its status.
  - Transport errors are reported in `error_message`; they are not raised.
  - Redirects are not followed.
- `untangle.terminal`: `Terminal` stores log lines and echoes them to
  stdout.
  - When it holds more than 10000 lines, it drops the oldest 1000.
  - `filtered(text)` returns the lines that contain the text, ignoring case.
  - `classify(line)` returns the line's `LogLevel`.
- `untangle.sidebar`: `Sidebar` tracks navigation state: the open project,
  the selected orchestration, and deletions awaiting confirmation.
- `untangle.database`: `Database` saves and loads projects, orchestrations,
  nodes and links in one SQLite file, `untangle.db` by default. It raises
  `DatabaseError` when the file cannot be opened or used.

## Running an orchestration

`NodeEditor.execute_orchestration(orchestration_id, terminal)` runs the
orchestration and returns the ids of the nodes that ran.

1. It clears the variables and runs the first `StartNode`.
2. It follows the first link whose start attribute is the current
   attribute to the next node that has not run yet.
3. It runs that node and continues from the node's last attribute.

The run stops when no link leads on, when a node fails, or after 100
steps.

`execute_selected_node(ids, terminal)` runs only the first node in `ids`.

What the node types do when they run:

- HTTP nodes send their request and store the response body and status
  code in the context.
- `SetVariableNode` stores the last response body under its variable name.
  `GetVariableNode` reads the variable back.
- `LogNode` logs its message.
- `DelayNode` sleeps for its number of milliseconds. It raises `ValueError`
  when the value is not a number.

## Example

```python
from untangle.database import Database
from untangle.node_editor import NodeEditor
from untangle.project import ProjectManager
from untangle.terminal import Terminal

projects = ProjectManager()
project = projects.add_project("Demo")
orchestration = project.add_orchestration("Get post")

editor = NodeEditor()
editor.create_node(orchestration.id, "Start", (0.0, 0.0))   # id 1, attribute 2
editor.create_node(orchestration.id, "LOG", (200.0, 0.0))   # id 11, attributes 12 and 13
editor.add_link(orchestration.id, 2, 12)

terminal = Terminal()
ran = editor.execute_orchestration(orchestration.id, terminal)   # [1, 11]
print(terminal.filtered("log:"))   # ['[EXEC] LOG: Request completed']

with Database("untangle.db") as database:
    database.save_all(projects, editor)
```

## What it does not do

- There is no graphical editor, window or command-line program. The
  package is a library.
- `JsonExtractNode`, `IfConditionNode` and `AssertNode` can be placed and
  stored, but running them only logs a warning and succeeds. They extract
  nothing, do not branch and check nothing.
- The database stores each node's id, type and position only. Node
  settings such as URL, headers, body, variable name or message go back to
  their defaults when loaded.

## Running the tests

```
pip install .[test]
pytest
```