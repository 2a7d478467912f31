import json

from visor_api.generate_openapi import generate_openapi


def test_generate_openapi_writes_schema(tmp_path):
    out = tmp_path / "interfaces" / "openapi.json"
    assert generate_openapi(str(out)) == str(out)

    schema = json.loads(out.read_text(encoding="utf-8"))
    assert {"/api/status", "/api/projects", "/api/tasks", "/api/tasks/{task_id}/complete", "/api/log"} <= set(schema["paths"])
    assert {t["name"] for t in schema["tags"]} >= {"status", "projects", "tasks", "log"}
