"""Generate JSON Schema and docs for the form YAML format."""

from __future__ import annotations

import json
from pathlib import Path

from formcheck.config import RULE_MODELS, FieldKind, FormConfig

DEFS_PREFIX = "#/$defs/"
JSON_SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"


def _refs_in(node: object) -> set[str]:
    """Names of the ``$defs`` entries that *node* points at."""
    found: set[str] = set()
    stack = [node]
    while stack:
        item = stack.pop()
        if isinstance(item, list):
            stack.extend(item)
        elif isinstance(item, dict):
            ref = item.get("$ref")
            if isinstance(ref, str) and ref.startswith(DEFS_PREFIX):
                found.add(ref[len(DEFS_PREFIX) :])
            stack.extend(item.values())
    return found


def _dependencies_first(defs: dict[str, dict]) -> dict[str, dict]:
    """Reorder ``$defs`` so every entry comes after the entries it refers to.

    Refs to names missing from ``defs`` are ignored. Otherwise the input order
    is kept.
    """
    placed: dict[str, dict] = {}
    for root in defs:
        path = [(root, iter(sorted(_refs_in(defs[root]))))]
        seen = {root}
        while path:
            name, deps = path[-1]
            dep = next(deps, None)
            if dep is None:
                path.pop()
                placed.setdefault(name, defs[name])
            elif dep in defs and dep not in placed and dep not in seen:
                seen.add(dep)
                path.append((dep, iter(sorted(_refs_in(defs[dep])))))
    return placed


def generate_json_schema() -> dict:
    schema = {"$schema": JSON_SCHEMA_DIALECT, **FormConfig.model_json_schema()}
    if "$defs" in schema:
        schema["$defs"] = _dependencies_first(schema["$defs"])
    return schema


def write_json_schema(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(generate_json_schema(), indent=2) + "\n")


def _rule_line(model: type, defs: dict) -> str:
    key = next(iter(model.model_fields))
    ref = defs.get(model.__name__, {}).get("properties", {}).get(key, {}).get("$ref", "")
    spec = defs.get(ref.removeprefix(DEFS_PREFIX), {})
    keys = ", ".join(spec.get("properties", {}))
    kinds = ", ".join(sorted(k.value for k in model.kinds))
    return f"- `{key}`: {{ {keys} }} (fields: {kinds})"


def generate_schema_doc() -> str:
    defs = generate_json_schema().get("$defs", {})
    kinds = ", ".join(k.value for k in FieldKind)
    lines = [
        "# formcheck YAML Schema",
        "",
        "This doc is generated from the Pydantic models.",
        "",
        "## Top-level keys",
        "- `fields`: list of field definitions, in validation order.",
        "- `real_time`: { enabled, debounce, disable_submit }",
        "- `submit`: string (optional) - id of the submit button",
        "",
        "## Field",
        "- `id`: string (required) - view id",
        f"- `kind`: string - one of: {kinds}",
        "- `name`: string (optional) - name used in errors and values",
        "- `optional`: bool - text rules only apply when not blank",
        "- `options`: list of strings - choice entries, by position",
        "- `maximum`: int - slider maximum",
        "- `rules`: array of rules",
        "",
        "## Rules",
    ]
    lines.extend(_rule_line(model, defs) for model in RULE_MODELS)
    lines.append("")
    return "\n".join(lines)


def write_schema_doc(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(generate_schema_doc())
