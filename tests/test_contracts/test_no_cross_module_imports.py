"""
Contract tests: Module boundary enforcement.

Scans all Python files under backend/modules/ for imports that reference
another module's services or routes directly. Modules share data only
through each other's table definitions and Pydantic schemas.

What is ALLOWED:
- Importing from another module's models.py  (shared table definitions)
- Importing from another module's schemas.py (shared Pydantic types)

What is FLAGGED as a violation:
- Importing from another module's services.py, routes.py or any other file

Run: pytest tests/test_contracts/test_no_cross_module_imports.py -v
"""

import re
import sys
from pathlib import Path

BACKEND_DIR = Path(__file__).resolve().parents[2] / "backend"
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

MODULES_DIR = BACKEND_DIR / "modules"

ALLOWED_PATTERNS = [
    ".models import",
    ".schemas import",
]

_IMPORT_RE = re.compile(r"(?:from|import)\s+modules\.([a-z_]+)")


def _cross_module_imports():
    """Yield (path, lineno, line, referenced module) for every cross-module import."""
    for module_dir in sorted(MODULES_DIR.iterdir()):
        if not module_dir.is_dir() or module_dir.name.startswith("_"):
            continue
        for py_file in sorted(module_dir.rglob("*.py")):
            if "__pycache__" in py_file.parts:
                continue
            lines = py_file.read_text(encoding="utf-8").splitlines()
            for lineno, raw_line in enumerate(lines, start=1):
                stripped = raw_line.strip()
                if not stripped.startswith(("from modules.", "import modules.")):
                    continue
                m = _IMPORT_RE.search(stripped)
                if m and m.group(1) != module_dir.name:
                    yield py_file, lineno, stripped, m.group(1)


class TestNoCrossModuleImports:

    def test_only_models_and_schemas_cross_boundaries(self):
        violations = [
            f"{path.relative_to(BACKEND_DIR.parent)}:{lineno}: {line}"
            for path, lineno, line, _ in _cross_module_imports()
            if not any(pattern in line for pattern in ALLOWED_PATTERNS)
        ]
        assert not violations, (
            f"Cross-module service/route imports found ({len(violations)}):\n"
            + "\n".join(f"  {v}" for v in violations)
        )

    def test_modules_scanned(self):
        modules = [d for d in MODULES_DIR.iterdir() if d.is_dir() and not d.name.startswith("_")]
        assert len(modules) >= 5, f"Expected at least 5 module directories, found {len(modules)}"


def test_cross_module_import_inventory():
    """Non-failing inventory of the dependency graph (use -v -s to see it)."""
    graph = {}
    for path, _, line, ref in _cross_module_imports():
        graph.setdefault(f"{path.parent.name} -> {ref}", []).append(line)
    for edge in sorted(graph):
        print(edge)
    assert isinstance(graph, dict)
