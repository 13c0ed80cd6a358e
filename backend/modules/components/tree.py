"""
Nested component views built from the flat components table.

The nested structure is never stored; it is rebuilt from the flat rows on
every read so the two representations cannot drift apart.
"""

from collections import defaultdict
from typing import Dict, List, Optional


def sibling_key(row: dict):
    """Siblings order by SFI code, then name (code-point order, case-sensitive)."""
    return (row.get("sfi_code") or "", row.get("name") or "")


def build_tree(rows: List[dict]) -> List[dict]:
    """Partition flat rows by parent_id and nest them, roots first.

    Rows whose parent_id points at a row that is not in the set are treated
    as roots so a partial listing still renders.
    """
    ids = {row["id"] for row in rows}
    by_parent: Dict[Optional[int], List[dict]] = defaultdict(list)
    for row in rows:
        parent = row.get("parent_id")
        by_parent[parent if parent in ids else None].append(row)

    def nest(parent_id: Optional[int]) -> List[dict]:
        return [
            {**row, "children": nest(row["id"])}
            for row in sorted(by_parent.get(parent_id, []), key=sibling_key)
        ]

    return nest(None)


def descendant_ids(rows: List[dict], root_id: int) -> set:
    """Ids of every component below root_id (root excluded)."""
    by_parent: Dict[Optional[int], List[int]] = defaultdict(list)
    for row in rows:
        by_parent[row.get("parent_id")].append(row["id"])

    found = set()
    stack = list(by_parent.get(root_id, []))
    while stack:
        current = stack.pop()
        if current in found:
            continue
        found.add(current)
        stack.extend(by_parent.get(current, []))
    return found
