from untangle.project import Orchestration, Project, ProjectManager


def test_first_project_id_is_one():
    manager = ProjectManager()
    project = manager.add_project("Test project 1")
    assert project.id == 1
    assert manager.get_project(1) is project


def test_project_ids_increase():
    manager = ProjectManager()
    first = manager.add_project("a")
    second = manager.add_project("b")
    assert second.id == first.id + 1
    assert [p.name for p in manager.projects] == ["a", "b"]


def test_add_project_with_id_moves_counter_forward():
    manager = ProjectManager()
    manager.add_project_with_id(42, "loaded")
    fresh = manager.add_project("new")
    assert fresh.id == 43


def test_add_project_with_lower_id_keeps_counter():
    manager = ProjectManager()
    manager.add_project_with_id(10, "high")
    manager.add_project_with_id(3, "low")
    fresh = manager.add_project("new")
    assert fresh.id == 11


def test_remove_project():
    manager = ProjectManager()
    keep = manager.add_project("keep")
    drop = manager.add_project("drop")
    manager.remove_project(drop.id)
    assert manager.projects == [keep]
    assert manager.get_project(drop.id) is None


def test_remove_missing_project_is_harmless():
    manager = ProjectManager()
    manager.add_project("x")
    manager.remove_project(999)
    assert len(manager.projects) == 1


def test_first_orchestration_id_is_1000():
    project = Project(1, "p")
    orchestration = project.add_orchestration("Get Users")
    assert orchestration == Orchestration(1000, "Get Users")


def test_orchestration_ids_increase():
    project = Project(1, "p")
    first = project.add_orchestration("a")
    second = project.add_orchestration("b")
    assert second.id == first.id + 1


def test_add_orchestration_with_id_moves_counter_forward():
    project = Project(1, "p")
    project.add_orchestration_with_id(1500, "loaded")
    fresh = project.add_orchestration("new")
    assert fresh.id == 1501


def test_add_orchestration_with_lower_id_keeps_counter():
    project = Project(1, "p")
    first = project.add_orchestration("a")
    project.add_orchestration_with_id(5, "low")
    fresh = project.add_orchestration("b")
    assert fresh.id == first.id + 1


def test_get_and_remove_orchestration():
    project = Project(1, "p")
    a = project.add_orchestration("a")
    b = project.add_orchestration("b")
    assert project.get_orchestration(b.id) is b
    project.remove_orchestration(a.id)
    assert project.orchestrations == [b]
    assert project.get_orchestration(a.id) is None


def test_projects_keep_separate_orchestration_counters():
    manager = ProjectManager()
    p1 = manager.add_project("one")
    p2 = manager.add_project("two")
    o1 = p1.add_orchestration("x")
    o2 = p2.add_orchestration("y")
    assert o1.id == o2.id