"""Navigation state for projects and orchestrations."""

from __future__ import annotations

from enum import Enum

from untangle.project import Orchestration, Project, ProjectManager

SIDEBAR_WIDTH = 250.0


class ViewMode(Enum):
    """Which list the sidebar shows."""

    PROJECTS = "projects"
    ORCHESTRATIONS = "orchestrations"


class Sidebar:
    """Tracks the open project, the selected orchestration and pending deletions."""

    width = SIDEBAR_WIDTH

    def __init__(self, project_manager: ProjectManager) -> None:
        self.project_manager = project_manager
        self.view_mode = ViewMode.PROJECTS
        self.current_project_id: int | None = None
        self.current_orchestration_id: int | None = None
        self.project_to_delete: int | None = None
        self.orchestration_to_delete: int | None = None

    @property
    def current_project(self) -> Project | None:
        """The open project, or None."""
        if self.current_project_id is None:
            return None
        return self.project_manager.get_project(self.current_project_id)

    def should_show_node_editor(self) -> bool:
        """True when an orchestration of an open project is selected."""
        return (
            self.view_mode is ViewMode.ORCHESTRATIONS
            and self.current_project_id is not None
            and self.current_orchestration_id is not None
        )

    def open_project(self, project_id: int) -> Project:
        """Open a project and show its orchestrations; raise KeyError if unknown."""
        project = self.project_manager.get_project(project_id)
        if project is None:
            raise KeyError(f"no project with id {project_id}")
        self.current_project_id = project_id
        self.current_orchestration_id = None
        self.view_mode = ViewMode.ORCHESTRATIONS
        return project

    def back_to_projects(self) -> None:
        """Return to the project list, dropping the current selection."""
        self.view_mode = ViewMode.PROJECTS
        self.current_project_id = None
        self.current_orchestration_id = None

    def select_orchestration(self, orchestration_id: int) -> Orchestration:
        """Select an orchestration of the open project; raise KeyError if absent."""
        project = self.current_project
        if project is None:
            raise KeyError("no project is open")
        orchestration = project.get_orchestration(orchestration_id)
        if orchestration is None:
            raise KeyError(f"no orchestration with id {orchestration_id}")
        self.current_orchestration_id = orchestration_id
        return orchestration

    def create_project(self, name: str) -> Project | None:
        """Add a project; an empty name adds nothing and returns None."""
        if not name:
            return None
        return self.project_manager.add_project(name)

    def create_orchestration(self, name: str) -> Orchestration | None:
        """Add an orchestration to the open project; None if nothing was added."""
        if not name:
            return None
        project = self.current_project
        if project is None:
            return None
        return project.add_orchestration(name)

    def request_delete_project(self, project_id: int) -> None:
        """Mark a project for deletion, pending confirmation."""
        self.project_to_delete = project_id

    def confirm_delete_project(self) -> None:
        """Delete the pending project, leaving it first if it is open."""
        target = self.project_to_delete
        if target is None:
            return
        if self.current_project_id == target:
            self.back_to_projects()
        self.project_manager.remove_project(target)
        self.project_to_delete = None

    def cancel_delete_project(self) -> None:
        self.project_to_delete = None

    def request_delete_orchestration(self, orchestration_id: int) -> None:
        """Mark an orchestration for deletion, pending confirmation."""
        self.orchestration_to_delete = orchestration_id

    def confirm_delete_orchestration(self) -> None:
        """Delete the pending orchestration from the open project."""
        target = self.orchestration_to_delete
        if target is None:
            return
        project = self.current_project
        if project is not None:
            if self.current_orchestration_id == target:
                self.current_orchestration_id = None
            project.remove_orchestration(target)
        self.orchestration_to_delete = None

    def cancel_delete_orchestration(self) -> None:
        self.orchestration_to_delete = None