"""
components/seeder.py: Demo data loader.

Imports the SFI group catalogue, then inserts the cargo-ship hierarchy and
its sample maintenance tasks in one transaction. Skipped entirely once any
component exists.
"""

import logging
from datetime import timedelta

from sqlalchemy import func, insert, select

from core.db import Storage
from core.time_utils import utcnow
from modules.components.models import components_table as components
from modules.components.schemas import ComponentCreate
from modules.components.seed_data import CARGO_SHIP, DEMO_TASKS
from modules.components.services import ComponentRegistry
from modules.maintenance.models import tasks_table as tasks

log = logging.getLogger("shipmaint.seed")


def _insert_nodes(registry: ComponentRegistry, nodes, parent_id, ids: dict) -> None:
    for item in nodes:
        fields = {k: v for k, v in item.items() if k != "children"}
        component_id = registry.insert(ComponentCreate(parent_id=parent_id, **fields))
        ids[item["sfi_code"]] = component_id
        _insert_nodes(registry, item["children"], component_id, ids)


def seed_demo_data(storage: Storage, clock=utcnow) -> dict:
    """Load demo components and tasks. Returns counts of what was created."""
    registry = ComponentRegistry(storage)
    groups = registry.import_sfi_groups()["created"]

    with storage.transaction():
        if storage.scalar(select(func.count()).select_from(components)):
            log.info("Components already present, skipping demo data")
            return {"sfi_groups": groups, "components": 0, "tasks": 0}

        ids = {}
        _insert_nodes(registry, CARGO_SHIP, None, ids)

        now = clock()
        created_tasks = 0
        for sfi_code, name, description, interval, since_done, until_due in DEMO_TASKS:
            if sfi_code not in ids:
                continue
            storage.execute(insert(tasks).values(
                component_id=ids[sfi_code],
                name=name,
                description=description,
                interval_hours=interval,
                last_done_at=now - timedelta(hours=since_done),
                due_at=now + timedelta(hours=until_due),
            ))
            created_tasks += 1

    log.info(f"Seeded {len(ids)} components and {created_tasks} maintenance tasks")
    return {"sfi_groups": groups, "components": len(ids), "tasks": created_tasks}
