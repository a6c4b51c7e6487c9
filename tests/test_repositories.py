import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from todo_api.exceptions import RepositoryError, TodoNotFoundError
from todo_api.repositories import InMemoryRepository, Repository
from todo_api.schemas import TodoCreate, TodoUpdate


class TestInMemoryRepository:
    def test_is_a_repository(self, repo):
        assert isinstance(repo, Repository)

    def test_create_assigns_sequential_ids(self, repo):
        a = repo.create(TodoCreate(text="a"))
        b = repo.create(TodoCreate(text="b"))
        assert a == {"id": 1, "text": "a", "completed": False}
        assert b == {"id": 2, "text": "b", "completed": False}
        assert len(repo) == 2

    def test_find_returns_created_record(self, repo):
        created = repo.create(TodoCreate(text="x"))
        assert repo.find(created["id"]) == created
        assert repo.find(99) is None

    def test_all_empty_and_populated(self, repo):
        assert repo.all() == []
        repo.create(TodoCreate(text="a"))
        repo.create(TodoCreate(text="b"))
        assert sorted(t["text"] for t in repo.all()) == ["a", "b"]

    def test_update_text_only(self, repo):
        tid = repo.create(TodoCreate(text="old"))["id"]
        repo.update(tid, TodoUpdate(completed=True))
        updated = repo.update(tid, TodoUpdate(text="new"))
        assert updated == {"id": tid, "text": "new", "completed": True}
        assert repo.find(tid) == updated

    def test_update_completed_only(self, repo):
        tid = repo.create(TodoCreate(text="keep"))["id"]
        updated = repo.update(tid, TodoUpdate(completed=True))
        assert updated == {"id": tid, "text": "keep", "completed": True}

    def test_empty_update_is_noop(self, repo):
        created = repo.create(TodoCreate(text="same"))
        assert repo.update(created["id"], TodoUpdate()) == created

    def test_update_missing_raises_and_leaves_store(self, repo):
        repo.create(TodoCreate(text="a"))
        before = repo.all()
        with pytest.raises(TodoNotFoundError) as excinfo:
            repo.update(5, TodoUpdate(text="nope"))
        assert excinfo.value.todo_id == 5
        assert excinfo.value.details == {"todo_id": 5}
        assert repo.all() == before

    def test_delete(self, repo):
        tid = repo.create(TodoCreate(text="gone"))["id"]
        repo.delete(tid)
        assert repo.find(tid) is None
        assert len(repo) == 0

    def test_delete_missing_raises(self, repo):
        repo.create(TodoCreate(text="a"))
        with pytest.raises(TodoNotFoundError) as excinfo:
            repo.delete(3)
        assert isinstance(excinfo.value, RepositoryError)
        assert str(excinfo.value) == "Todo not found: 3"
        assert len(repo) == 1

    def test_delete_twice_raises(self, repo):
        tid = repo.create(TodoCreate(text="a"))["id"]
        repo.delete(tid)
        with pytest.raises(TodoNotFoundError):
            repo.delete(tid)

    def test_ids_never_reused(self, repo):
        first = repo.create(TodoCreate(text="1"))["id"]
        second = repo.create(TodoCreate(text="2"))["id"]
        repo.delete(first)
        third = repo.create(TodoCreate(text="3"))["id"]
        assert third not in (first, second)
        assert repo.find(second)["text"] == "2"
        repo.delete(third)
        assert repo.create(TodoCreate(text="4"))["id"] > third

    def test_returned_records_are_copies(self, repo):
        created = repo.create(TodoCreate(text="orig"))
        created["text"] = "mutated"
        found = repo.find(created["id"])
        found["completed"] = True
        for item in repo.all():
            item["text"] = "also mutated"
        assert repo.find(created["id"]) == {"id": created["id"], "text": "orig", "completed": False}

    def test_count_tracks_creates_minus_deletes(self, repo):
        ids = [repo.create(TodoCreate(text=str(i)))["id"] for i in range(10)]
        for tid in ids[::3]:
            repo.delete(tid)
        with pytest.raises(TodoNotFoundError):
            repo.delete(ids[0])
        assert len(repo.all()) == 10 - len(ids[::3])


class TestInMemoryRepositoryConcurrency:
    def test_concurrent_creates_get_distinct_ids(self, repo):
        with ThreadPoolExecutor(max_workers=16) as pool:
            results = list(pool.map(lambda i: repo.create(TodoCreate(text=str(i))), range(500)))
        ids = [r["id"] for r in results]
        assert len(set(ids)) == 500
        assert len(repo) == 500

    def test_concurrent_creates_and_deletes_keep_ids_unique(self, repo):
        seen = []
        seen_lock = threading.Lock()

        def worker(n: int) -> None:
            for i in range(50):
                created = repo.create(TodoCreate(text=f"{n}-{i}"))
                with seen_lock:
                    seen.append(created["id"])
                if i % 2 == 0:
                    repo.delete(created["id"])

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(seen) == len(set(seen)) == 400
        assert len(repo.all()) == 200
        assert len({t["id"] for t in repo.all()}) == 200

    def test_concurrent_updates_end_in_a_consistent_state(self, repo):
        tid = repo.create(TodoCreate(text="start"))["id"]
        texts = [f"t{i}" for i in range(200)]

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda t: repo.update(tid, TodoUpdate(text=t)), texts))
            reads = list(pool.map(lambda _: repo.find(tid), range(200)))

        assert repo.find(tid)["text"] in texts
        for r in reads:
            assert r["id"] == tid
            assert r["text"] in texts
