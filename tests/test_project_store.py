import threading

import pytest

from devstudio.models.project import FileCreate, FileUpdate, ProjectCreate, ProjectUpdate
from devstudio.services.project_store import LOCK_STRIPES, ProjectStore


@pytest.fixture
def store():
    return ProjectStore()


@pytest.fixture
def project(store):
    return store.create(ProjectCreate(name="demo", description="x", language="go"))


def _file(name="main.go", content="package main"):
    return FileCreate(name=name, path=f"/{name}", content=content, language="go")


def test_create_assigns_id_and_timestamps(store, project):
    assert project.id
    assert project.created_at == project.updated_at
    assert project.files == []
    assert store.get(project.id) == project


def test_list_all_returns_every_project(store, project):
    other = store.create(ProjectCreate(name="api", description="y", language="python"))
    assert {p.id for p in store.list_all()} == {project.id, other.id}


def test_update_is_partial_and_preserves_identity(store, project):
    updated = store.update(project.id, ProjectUpdate(name="renamed"))

    assert updated.id == project.id
    assert updated.created_at == project.created_at
    assert updated.name == "renamed"
    assert updated.description == "x"
    assert updated.updated_at >= project.updated_at


def test_update_can_clear_framework(store):
    project = store.create(ProjectCreate(name="web", description="x", language="ts", framework="react"))

    updated = store.update(project.id, ProjectUpdate.model_validate({"framework": None}))

    assert updated.framework is None


def test_update_ignores_null_for_required_fields(store, project):
    updated = store.update(project.id, ProjectUpdate.model_validate({"name": None}))
    assert updated.name == "demo"


def test_unknown_ids_return_none_or_false(store):
    assert store.get("missing") is None
    assert store.update("missing", ProjectUpdate(name="x")) is None
    assert store.delete("missing") is False
    assert store.add_file("missing", _file()) is None
    assert store.get_file("missing", "f") is None
    assert store.update_file("missing", "f", FileUpdate(content="x")) is None
    assert store.delete_file("missing", "f") is False


def test_add_file_is_visible_on_project(store, project):
    added = store.add_file(project.id, _file())

    fetched = store.get(project.id)
    assert len(fetched.files) == 1
    assert fetched.files[0].content == "package main"
    assert fetched.files[0].id == added.id
    assert fetched.updated_at >= project.updated_at


def test_update_file_preserves_id_and_created_at(store, project):
    added = store.add_file(project.id, _file())

    updated = store.update_file(project.id, added.id, FileUpdate(content="package util"))

    assert updated.id == added.id
    assert updated.created_at == added.created_at
    assert updated.name == "main.go"
    assert store.get_file(project.id, added.id).content == "package util"


def test_unknown_file_in_known_project(store, project):
    assert store.get_file(project.id, "nope") is None
    assert store.update_file(project.id, "nope", FileUpdate(content="x")) is None
    assert store.delete_file(project.id, "nope") is False


def test_delete_file(store, project):
    added = store.add_file(project.id, _file())

    assert store.delete_file(project.id, added.id) is True
    assert store.get(project.id).files == []


def test_delete_project_removes_files(store, project):
    added = store.add_file(project.id, _file())

    assert store.delete(project.id) is True
    assert store.get(project.id) is None
    assert store.get_file(project.id, added.id) is None


def test_returned_records_are_copies(store, project):
    fetched = store.get(project.id)
    fetched.name = "mutated"
    fetched.files.append(store.add_file(project.id, _file()))

    stored = store.get(project.id)
    assert stored.name == "demo"
    assert len(stored.files) == 1


def test_injected_backing_is_used():
    backing = {}
    store = ProjectStore(backing)

    project = store.create(ProjectCreate(name="demo", description="x", language="go"))

    assert project.id in backing


def test_concurrent_file_adds_are_not_lost(store, project):
    def add(index):
        store.add_file(project.id, _file(name=f"f{index}.go"))

    threads = [threading.Thread(target=add, args=(i,)) for i in range(20)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(store.get(project.id).files) == 20


def test_lock_pool_does_not_grow_with_project_ids(store):
    for index in range(100):
        created = store.create(ProjectCreate(name=f"p{index}", description="x", language="go"))
        store.update(created.id, ProjectUpdate(name="renamed"))
        store.delete(created.id)
        store.get(f"unknown-{index}")
        store.delete(f"unknown-{index}")

    assert len(store._locks) == LOCK_STRIPES
    assert store.list_all() == []
