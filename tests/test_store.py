import json

import pytest

from api_load_templates.errors import ProcessingError
from api_load_templates.generator.base import ProcessedTemplate
from api_load_templates.store import InMemoryStore, JsonFileStore


def _template(path: str = "/pets") -> ProcessedTemplate:
    return ProcessedTemplate(
        method="GET",
        full_path=f"https://api.example.com{path}",
        request_headers=json.dumps({"Content-Type": "application/json"}),
    )


class TestInMemoryStore:
    def test_ids_increment(self):
        store = InMemoryStore()
        first = store.save(_template(), user_id="u", total_requests=10, threads=2)
        second = store.save(_template("/users"), user_id="u", total_requests=10, threads=2)
        assert (first.id, second.id) == (1, 2)
        assert second.full_path == "https://api.example.com/users"
        assert second.load_status is True


class TestJsonFileStore:
    def test_save_appends_records(self, tmp_path):
        path = tmp_path / "runs" / "templates.json"
        store = JsonFileStore(path)
        store.save(_template(), user_id="u", total_requests=10, threads=2)
        record = store.save(_template("/users"), user_id="v", total_requests=5, threads=1)

        assert record.id == 2
        data = json.loads(path.read_text(encoding="utf-8"))
        assert [(r["id"], r["user_id"], r["threads"]) for r in data] == [(1, "u", 2), (2, "v", 1)]

    def test_ids_continue_after_existing_records(self, tmp_path):
        path = tmp_path / "templates.json"
        JsonFileStore(path).save(_template(), user_id="u", total_requests=1, threads=1)
        record = JsonFileStore(path).save(_template(), user_id="u", total_requests=1, threads=1)
        assert record.id == 2
        assert len(JsonFileStore(path).load()) == 2

    def test_corrupt_file_is_processing_error(self, tmp_path):
        path = tmp_path / "templates.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ProcessingError):
            JsonFileStore(path).save(_template(), user_id="u", total_requests=1, threads=1)
