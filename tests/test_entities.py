import uuid

from visor_api import entities
from visor_api.models import DEFAULT_PROJECT_COLOR, INBOX_PROJECT_ID, Document, Project, Task


def _doc_with_projects(*projects: Project) -> Document:
    return Document(projects={p.id: p for p in projects})


class TestIdsAndTimestamps:
    def test_new_id_is_uuid4(self):
        value = entities.new_id()
        assert uuid.UUID(value).version == 4
        assert entities.new_id() != value

    def test_now_ms_is_milliseconds(self):
        # Anything after 2001-09-09 has 13 digits in milliseconds.
        assert len(str(entities.now_ms())) == 13


class TestResolveProject:
    def test_matching_slug_returns_project_key(self):
        work = Project(id="p-work", name="Work", slug="work")
        doc = _doc_with_projects(work)
        assert entities.resolve_project_id(doc, "work") == "p-work"

    def test_unknown_slug_falls_back_to_inbox(self):
        doc = _doc_with_projects(Project(id="p-work", name="Work", slug="work"))
        assert entities.resolve_project_id(doc, "home") == INBOX_PROJECT_ID

    def test_slug_match_is_case_sensitive(self):
        doc = _doc_with_projects(Project(id="p-work", name="Work", slug="work"))
        assert entities.resolve_project_id(doc, "Work") == INBOX_PROJECT_ID

    def test_missing_slug_means_inbox_slug(self):
        inbox = Project(id="inbox", name="Inbox", slug="inbox", is_inbox=True)
        assert entities.resolve_project_id(_doc_with_projects(inbox), None) == "inbox"

    def test_duplicate_slugs_first_match_wins(self):
        first = Project(id="a", name="A", slug="dup")
        second = Project(id="b", name="B", slug="dup")
        doc = _doc_with_projects(first, second)
        assert entities.resolve_project_id(doc, "dup") == "a"
        assert entities.find_project_by_slug(doc, "dup") is first


class TestDefaultRecords:
    def test_make_project_defaults(self):
        project = entities.make_project("Work", "work")
        assert project.color == DEFAULT_PROJECT_COLOR
        assert project.task_order == []
        assert project.is_inbox is False
        assert project.created_at > 0

    def test_make_task_defaults(self):
        task = entities.make_task("write spec", "p1")
        data = task.model_dump(by_alias=True)
        assert data["status"] == "TODO"
        assert data["completed"] is False
        assert data["archived"] is False
        assert data["projectId"] == "p1"
        assert data["indent"] == 0
        for key in ("parentId", "completedAt", "dueAt", "scheduled", "notes", "recurrence"):
            assert data[key] is None

    def test_make_log_entry(self):
        entry = entities.make_log_entry("shipped", "inbox")
        assert entry.model_dump(by_alias=True).keys() == {"id", "content", "createdAt", "projectId"}


class TestPredicates:
    def test_pending_ignores_status_field(self):
        assert entities.is_pending(Task(id="t", content="x", status="DONE"))
        assert not entities.is_pending(Task(id="t", content="x", completed=True))
        assert not entities.is_pending(Task(id="t", content="x", archived=True))

    def test_is_completed(self):
        assert entities.is_completed(Task(id="t", content="x", completed=True))
        assert not entities.is_completed(Task(id="t", content="x", status="DONE"))


class TestMutations:
    def test_add_task_appends_to_task_order_once(self):
        project = Project(id="p1", name="Work", slug="work", task_order=["old"])
        doc = _doc_with_projects(project)
        task = entities.make_task("new", "p1")
        entities.add_task(doc, task)
        entities.add_task(doc, task)
        assert doc.projects["p1"].task_order == ["old", task.id]
        assert doc.tasks[task.id] is task

    def test_add_task_to_inbox_sentinel_without_project(self):
        doc = Document()
        task = entities.add_task(doc, entities.make_task("loose", INBOX_PROJECT_ID))
        assert doc.tasks == {task.id: task}
        assert doc.projects == {}

    def test_task_order_change_is_persisted(self):
        # Project loaded without a taskOrder key still writes the new order.
        doc = Document.model_validate({"projects": {"p1": {"id": "p1", "slug": "work"}}})
        task = entities.add_task(doc, entities.make_task("x", "p1"))
        assert doc.to_storage()["projects"]["p1"]["taskOrder"] == [task.id]

    def test_complete_task(self):
        task = entities.make_task("x", "p1")
        entities.complete_task(task, completed_at=42)
        assert (task.completed, task.status, task.completed_at) == (True, "DONE", 42)

    def test_archive_task_keeps_completion(self):
        task = entities.make_task("x", "p1")
        entities.archive_task(task)
        assert task.archived is True
        assert task.completed is False
        assert task.to_storage()["archived"] is True
