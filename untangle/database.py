"""SQLite persistence for projects, orchestrations, nodes and links."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from untangle.node_editor import LinkData, NodeData, NodeEditor
from untangle.project import ProjectManager

DEFAULT_PATH = "untangle.db"

_log = logging.getLogger(__name__)

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS projects (
        id INTEGER PRIMARY KEY,
        name TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS orchestrations (
        id INTEGER PRIMARY KEY,
        project_id INTEGER NOT NULL,
        name TEXT NOT NULL,
        FOREIGN KEY (project_id) REFERENCES projects(id) ON DELETE CASCADE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS nodes (
        id INTEGER PRIMARY KEY,
        orchestration_id INTEGER NOT NULL,
        type TEXT NOT NULL,
        pos_x REAL NOT NULL,
        pos_y REAL NOT NULL,
        FOREIGN KEY (orchestration_id) REFERENCES orchestrations(id) ON DELETE CASCADE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS links (
        id INTEGER PRIMARY KEY,
        orchestration_id INTEGER NOT NULL,
        start_attr INTEGER NOT NULL,
        end_attr INTEGER NOT NULL,
        FOREIGN KEY (orchestration_id) REFERENCES orchestrations(id) ON DELETE CASCADE
    )
    """,
)


class DatabaseError(Exception):
    """The database could not be opened or used."""


class Database:
    """Stores the whole workspace in one SQLite file."""

    def __init__(self, path: str | Path = DEFAULT_PATH) -> None:
        try:
            self._conn: sqlite3.Connection | None = sqlite3.connect(
                str(path), isolation_level=None
            )
        except sqlite3.Error as err:
            raise DatabaseError(f"failed to open database: {err}") from err
        try:
            for statement in _SCHEMA:
                self._conn.execute(statement)
        except sqlite3.Error as err:
            self.close()
            raise DatabaseError(f"failed to create tables: {err}") from err

    def __enter__(self) -> Database:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._conn is None

    def close(self) -> None:
        """Close the connection; closing twice is harmless."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise DatabaseError("database is closed")
        return self._conn

    @staticmethod
    def _insert(conn: sqlite3.Connection, sql: str, row: tuple, what: str) -> None:
        try:
            conn.execute(sql, row)
        except sqlite3.Error as err:
            _log.warning("Failed to save %s: %s", what, err)

    def save_projects(self, project_manager: ProjectManager) -> None:
        """Replace every stored table with the given projects and orchestrations."""
        conn = self._connection()
        for table in ("links", "nodes", "orchestrations", "projects"):
            conn.execute(f"DELETE FROM {table}")
        for project in project_manager.projects:
            self._insert(
                conn,
                "INSERT INTO projects (id, name) VALUES (?, ?)",
                (project.id, project.name),
                "project",
            )
            for orchestration in project.orchestrations:
                self._insert(
                    conn,
                    "INSERT INTO orchestrations (id, project_id, name) VALUES (?, ?, ?)",
                    (orchestration.id, project.id, orchestration.name),
                    "orchestration",
                )

    def save_nodes(self, node_editor: NodeEditor) -> None:
        """Replace the stored nodes with those of the editor."""
        conn = self._connection()
        conn.execute("DELETE FROM nodes")
        for item in node_editor.all_nodes_data():
            self._insert(
                conn,
                "INSERT INTO nodes (id, orchestration_id, type, pos_x, pos_y) "
                "VALUES (?, ?, ?, ?, ?)",
                (item.id, item.orchestration_id, item.type, item.pos_x, item.pos_y),
                "node",
            )

    def save_links(self, node_editor: NodeEditor) -> None:
        """Replace the stored links with those of the editor."""
        conn = self._connection()
        conn.execute("DELETE FROM links")
        for item in node_editor.all_links_data():
            self._insert(
                conn,
                "INSERT INTO links (id, orchestration_id, start_attr, end_attr) "
                "VALUES (?, ?, ?, ?)",
                (item.id, item.orchestration_id, item.start_attr, item.end_attr),
                "link",
            )

    def load_projects(self, project_manager: ProjectManager) -> None:
        """Add the stored projects and their orchestrations, ordered by id."""
        conn = self._connection()
        projects = conn.execute("SELECT id, name FROM projects ORDER BY id").fetchall()
        for project_id, name in projects:
            project = project_manager.add_project_with_id(project_id, name)
            rows = conn.execute(
                "SELECT id, name FROM orchestrations WHERE project_id = ? ORDER BY id",
                (project_id,),
            )
            for orchestration_id, orchestration_name in rows:
                project.add_orchestration_with_id(orchestration_id, orchestration_name)

    def load_nodes(self, node_editor: NodeEditor) -> None:
        """Recreate the stored nodes in the editor."""
        conn = self._connection()
        rows = conn.execute(
            "SELECT id, orchestration_id, type, pos_x, pos_y FROM nodes "
            "ORDER BY orchestration_id, id"
        )
        node_editor.load_nodes_data([NodeData(*row) for row in rows])

    def load_links(self, node_editor: NodeEditor) -> None:
        """Recreate the stored links in the editor."""
        conn = self._connection()
        rows = conn.execute(
            "SELECT id, orchestration_id, start_attr, end_attr FROM links "
            "ORDER BY orchestration_id, id"
        )
        node_editor.load_links_data([LinkData(*row) for row in rows])

    def save_all(self, project_manager: ProjectManager, node_editor: NodeEditor) -> None:
        """Save everything in one transaction, rolling back on failure."""
        conn = self._connection()
        conn.execute("BEGIN")
        try:
            self.save_projects(project_manager)
            self.save_nodes(node_editor)
            self.save_links(node_editor)
        except BaseException as err:
            conn.execute("ROLLBACK")
            _log.error("Failed to save data, rolled back transaction")
            if isinstance(err, sqlite3.Error):
                raise DatabaseError(f"failed to save data: {err}") from err
            raise
        conn.execute("COMMIT")
        _log.info("Data saved successfully")

    def load_all(self, project_manager: ProjectManager, node_editor: NodeEditor) -> None:
        """Load projects, nodes and links."""
        try:
            self.load_projects(project_manager)
            self.load_nodes(node_editor)
            self.load_links(node_editor)
        except sqlite3.Error as err:
            raise DatabaseError(f"failed to load data: {err}") from err
        _log.info("Data loaded successfully")