"""rfcpointer demo — address, navigate and search JSON documents."""

import json

from pydantic import BaseModel

import rfcpointer as rp

# ── A document ──────────────────────────────────────────────────────

doc = json.loads(
    """
{
  "project": "apollo",
  "owner": null,
  "tasks": [
    {"title": "Fix the login bug", "priority": "high", "tags": ["auth", "p0"]},
    {"title": "Deploy v2", "priority": "medium", "tags": []}
  ],
  "a/b": {"m~n": "escaped keys"}
}
"""
)


class Task(BaseModel):
    title: str
    priority: str
    tags: list[str] = []


# ── 1. Parse and resolve ────────────────────────────────────────────

pointer = rp.JsonPointer.parse("/tasks/0/title")
print("1) resolve — follow a pointer")
print(f"   {pointer} → {pointer.resolve(doc)!r}")
print(f"   tokens={pointer.tokens}")
print()


# ── 2. Escaping and URI fragments ───────────────────────────────────
#
# Tokens are stored unescaped; "~0"/"~1" and percent-encoding only
# exist in the string forms.

escaped = rp.ROOT / "a/b" / "m~n"
print("2) escaping — keys containing '/' and '~'")
print(f"   tokens={escaped.tokens}")
print(f"   str:      {escaped}")
print(f"   fragment: {escaped.to_uri_fragment()}")
print(f"   value:    {escaped.resolve(doc)!r}")
print()


# ── 3. exists vs resolve ────────────────────────────────────────────
#
# A null member exists; a missing key or an index past the end does not.

print("3) exists — present-but-null is not missing")
for path in ("/owner", "/missing", "/tasks/1", "/tasks/2", "/tasks/-"):
    print(f"   exists({path!r:12}) = {rp.exists(path, doc)}")
try:
    rp.resolve("/tasks/2/title", doc)
except rp.ResolutionError as exc:
    print(f"   resolve failed at {exc.pointer}: {exc}")
print()


# ── 4. References: cached navigation ────────────────────────────────

ref = rp.JsonReference(doc)
task = ref / "tasks" / 1
print("4) JsonReference — step through the tree without re-walking it")
print(f"   {task.pointer} valid={task.valid} → {task}")
print(f"   has_child('tags')={task.has_child('tags')}  has_child(0)={task.has_child(0)}")
print(f"   {task.child('nope').pointer} → {task.child('nope')}")
print(f"   parent: {task.parent().pointer} → {len(task.parent().value)} tasks")
print()


# ── 5. Reverse lookup ───────────────────────────────────────────────

tags = doc["tasks"][0]["tags"]
print("5) locate — find where a node lives (identity search)")
print(f"   {rp.locate(doc, tags)}")
print(f"   {ref.locate_child(tags)!r}")
print()


# ── 6. Pydantic ─────────────────────────────────────────────────────


class Bookmark(BaseModel):
    label: str
    target: rp.JsonPointer


mark = Bookmark.model_validate_json('{"label": "first task", "target": "/tasks/0"}')
print("6) pydantic — pointers as fields, values as models")
print(f"   {mark!r}")
print(f"   {mark.model_dump_json()}")
print(f"   {rp.resolve_as(mark.target, doc, Task)!r}")
