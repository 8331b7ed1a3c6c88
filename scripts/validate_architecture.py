#!/usr/bin/env python3
"""
Validate the layered architecture of nexus_engine.

Rules:
- c1 packages import only other c1 packages (plus stdlib + external)
- core imports from c1 only
- c2 packages import from c1, core and other c2 packages

Nothing below c2 may reach upward.
"""

import ast
import sys
from pathlib import Path
from typing import Dict, List, Set, Tuple

PACKAGE = "nexus_engine"

ALLOWED_LAYERS: Dict[str, Set[str]] = {
    "c1": {"c1"},
    "core": {"c1", "core"},
    "c2": {"c1", "c2", "core"},
    "root": {"c1", "c2", "core", "root"},
}


def extract_imports(file_path: Path) -> List[str]:
    """Extract all nexus_engine module imports from a Python file."""
    try:
        tree = ast.parse(file_path.read_text(), filename=str(file_path))
    except SyntaxError as e:
        print(f"⚠️  Syntax error in {file_path}: {e}")
        return []

    prefix = PACKAGE + "."
    imports = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            imports.extend(alias.name for alias in node.names if alias.name.startswith(prefix))
        elif isinstance(node, ast.ImportFrom):
            if node.module and node.module.startswith(prefix):
                imports.append(node.module)
    return imports


def get_layer(subpackage: str) -> str:
    """Get layer for a top-level subpackage of nexus_engine."""
    if subpackage.startswith("c1_"):
        return "c1"
    if subpackage.startswith("c2_"):
        return "c2"
    if subpackage == "core":
        return "core"
    return "root"


def validate_layer_dependencies(package_dir: Path) -> Tuple[bool, List[str]]:
    """Validate that layer dependencies follow the rules."""
    violations = []

    if not package_dir.exists():
        return False, [f"Package directory not found: {package_dir}"]

    for py_file in sorted(package_dir.rglob("*.py")):
        parts = py_file.relative_to(package_dir).parts
        file_layer = get_layer(parts[0]) if len(parts) > 1 else "root"

        for imported_module in extract_imports(py_file):
            imported_layer = get_layer(imported_module.split(".")[1])
            if imported_layer not in ALLOWED_LAYERS[file_layer]:
                violations.append(
                    f"{py_file}: {file_layer} cannot import from {imported_layer} ({imported_module})"
                )

    return len(violations) == 0, violations


def main():
    """Run architecture validation."""
    package_dir = Path(__file__).resolve().parent.parent / PACKAGE
    print("=" * 70)
    print("Layered Architecture Validator")
    print("=" * 70)
    print()

    success, violations = validate_layer_dependencies(package_dir)

    if success:
        print("✅ All layer dependencies are valid!")
        return 0

    print(f"❌ Found {len(violations)} layer dependency violations:")
    print()
    for violation in violations:
        print(f"  - {violation}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
