import pytest

from visor_api.models import Document
from visor_api.queries import TaskQuery, list_tasks, status_summary


def build_document() -> Document:
    return Document.model_validate(
        {
            "projects": {
                "p-work": {"id": "p-work", "name": "Work", "slug": "work"},
                "p-home": {"id": "p-home", "name": "Home", "slug": "home"},
            },
            "tasks": {
                "t1": {"id": "t1", "content": "a", "projectId": "p-work", "status": "TODO"},
                "t2": {"id": "t2", "content": "b", "projectId": "p-work", "status": "DONE", "completed": True},
                "t3": {"id": "t3", "content": "c", "projectId": "p-home", "status": "DOING"},
                "t4": {"id": "t4", "content": "d", "projectId": "p-home", "archived": True},
                # status says DONE but the task was never completed
                "t5": {"id": "t5", "content": "e", "projectId": "gone", "status": "DONE"},
                "t6": {"id": "t6", "content": "f", "projectId": "inbox"},
            },
        }
    )


def ids(tasks):
    return [t.id for t in tasks]


class TestListTasks:
    def test_no_filters_returns_all_in_document_order(self):
        assert ids(list_tasks(build_document())) == ["t1", "t2", "t3", "t4", "t5", "t6"]

    def test_filter_by_project_slug(self):
        assert ids(list_tasks(build_document(), TaskQuery(project="work"))) == ["t1", "t2"]

    def test_project_slug_is_case_sensitive(self):
        assert list_tasks(build_document(), TaskQuery(project="Work")) == []

    @pytest.mark.parametrize("slug", ["work", "home", "inbox", "gone"])
    def test_unknown_project_ids_never_match(self, slug):
        found = ids(list_tasks(build_document(), TaskQuery(project=slug)))
        assert "t5" not in found
        assert "t6" not in found

    def test_pending_ignores_status(self):
        doc = build_document()
        found = ids(list_tasks(doc, TaskQuery(status="pending")))
        assert found == ["t1", "t3", "t5", "t6"]
        for task in doc.tasks.values():
            assert (task.id in found) == (not task.archived and not task.completed)

    @pytest.mark.parametrize("value", ["done", "DONE", "Done"])
    def test_status_value_is_upper_cased(self, value):
        assert ids(list_tasks(build_document(), TaskQuery(status=value))) == ["t2", "t5"]

    def test_missing_status_counts_as_todo(self):
        assert ids(list_tasks(build_document(), TaskQuery(status="todo"))) == ["t1", "t4", "t6"]

    def test_empty_status_follows_completed(self):
        doc = Document.model_validate(
            {
                "tasks": {
                    "t1": {"id": "t1", "content": "a", "completed": True, "status": None},
                    "t2": {"id": "t2", "content": "b", "completed": True},
                    "t3": {"id": "t3", "content": "c", "status": ""},
                },
            }
        )
        assert ids(list_tasks(doc, TaskQuery(status="done"))) == ["t1", "t2"]
        assert ids(list_tasks(doc, TaskQuery(status="todo"))) == ["t3"]

    def test_filters_are_combined(self):
        doc = build_document()
        assert ids(list_tasks(doc, TaskQuery(project="home", status="pending"))) == ["t3"]
        assert ids(list_tasks(doc, TaskQuery(project="home", status="doing"))) == ["t3"]
        assert list_tasks(doc, TaskQuery(project="work", status="doing")) == []


def test_status_summary():
    assert status_summary(build_document()) == {"tasks": 6, "projects": 2, "pending": 4}


def test_status_summary_empty_document():
    assert status_summary(Document()) == {"tasks": 0, "projects": 0, "pending": 0}
