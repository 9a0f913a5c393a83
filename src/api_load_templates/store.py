"""Persistence collaborator for processed templates.

The processor only depends on the TemplateStore protocol; the two stores
here back the CLI and the tests.
"""

import json
import logging
from pathlib import Path
from typing import Protocol

from api_load_templates.errors import ProcessingError
from api_load_templates.generator.base import ProcessedTemplate, StoredTemplate

logger = logging.getLogger(__name__)


class TemplateStore(Protocol):
    def save(
        self,
        template: ProcessedTemplate,
        *,
        user_id: str,
        total_requests: int,
        threads: int,
    ) -> StoredTemplate: ...


def _stored(template: ProcessedTemplate, record_id: int, user_id: str, total_requests: int, threads: int) -> StoredTemplate:
    return StoredTemplate(
        **template.model_dump(),
        id=record_id,
        user_id=user_id,
        total_requests=total_requests,
        threads=threads,
    )


class InMemoryStore:
    """Keeps saved templates in a list; ids start at 1."""

    def __init__(self):
        self.records: list[StoredTemplate] = []

    def save(self, template, *, user_id, total_requests, threads):
        record = _stored(template, len(self.records) + 1, user_id, total_requests, threads)
        self.records.append(record)
        return record


class JsonFileStore:
    """Appends saved templates to a JSON array file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> list[StoredTemplate]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return [StoredTemplate.model_validate(item) for item in data]
        except (OSError, ValueError, TypeError) as e:
            raise ProcessingError(f"could not read store {self.path}: {e}") from e

    def save(self, template, *, user_id, total_requests, threads):
        records = self.load()
        next_id = max((r.id for r in records), default=0) + 1
        record = _stored(template, next_id, user_id, total_requests, threads)
        records.append(record)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps([r.model_dump() for r in records], indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
        logger.debug("Saved template %d (%s %s) to %s", next_id, record.method, record.full_path, self.path)
        return record
