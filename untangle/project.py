"""Projects and the orchestrations they hold."""

from __future__ import annotations

from dataclasses import dataclass, field

FIRST_PROJECT_ID = 1
FIRST_ORCHESTRATION_ID = 1000


@dataclass
class Orchestration:
    """A named workflow inside a project."""

    id: int
    name: str


@dataclass
class Project:
    """A named collection of orchestrations."""

    id: int
    name: str
    orchestrations: list[Orchestration] = field(default_factory=list)
    _next_orchestration_id: int = field(
        default=FIRST_ORCHESTRATION_ID, repr=False, compare=False
    )

    def add_orchestration(self, name: str) -> Orchestration:
        """Add an orchestration with the next free id and return it."""
        orchestration = Orchestration(self._next_orchestration_id, name)
        self._next_orchestration_id += 1
        self.orchestrations.append(orchestration)
        return orchestration

    def add_orchestration_with_id(self, orchestration_id: int, name: str) -> Orchestration:
        """Add an orchestration with a given id, keeping later ids above it."""
        orchestration = Orchestration(orchestration_id, name)
        self.orchestrations.append(orchestration)
        if orchestration_id >= self._next_orchestration_id:
            self._next_orchestration_id = orchestration_id + 1
        return orchestration

    def remove_orchestration(self, orchestration_id: int) -> None:
        """Remove every orchestration with the given id."""
        self.orchestrations = [
            o for o in self.orchestrations if o.id != orchestration_id
        ]

    def get_orchestration(self, orchestration_id: int) -> Orchestration | None:
        """Return the orchestration with the given id, or None."""
        return next((o for o in self.orchestrations if o.id == orchestration_id), None)


@dataclass
class ProjectManager:
    """Owns all projects and hands out project ids."""

    projects: list[Project] = field(default_factory=list)
    _next_project_id: int = field(default=FIRST_PROJECT_ID, repr=False, compare=False)

    def add_project(self, name: str) -> Project:
        """Add a project with the next free id and return it."""
        project = Project(self._next_project_id, name)
        self._next_project_id += 1
        self.projects.append(project)
        return project

    def add_project_with_id(self, project_id: int, name: str) -> Project:
        """Add a project with a given id, keeping later ids above it."""
        project = Project(project_id, name)
        self.projects.append(project)
        if project_id >= self._next_project_id:
            self._next_project_id = project_id + 1
        return project

    def remove_project(self, project_id: int) -> None:
        """Remove every project with the given id."""
        self.projects = [p for p in self.projects if p.id != project_id]

    def get_project(self, project_id: int) -> Project | None:
        """Return the project with the given id, or None."""
        return next((p for p in self.projects if p.id == project_id), None)