# This file serves the HTML landing page that lists the available endpoints.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from taskmanager.api.api_config import ApiConfig
from taskmanager.api.dependencies import get_config

router = APIRouter(include_in_schema=False)
ConfigDep = Annotated[ApiConfig, Depends(get_config)]

_ENDPOINTS: list[tuple[str, str, str | None]] = [
    ("GET /health", "Application and database health", None),
    ("GET /api/users", "List all users", None),
    ("POST /api/users", "Create a user", '{"name": "John Doe", "email": "john@example.com"}'),
    ("GET /api/tasks", "List all tasks with their owner", None),
    (
        "POST /api/tasks",
        "Create a task",
        '{"user_id": 1, "title": "My task", "description": "Description", "status": "pending"}',
    ),
    ("PUT /api/tasks/{id}", "Update a task", '{"status": "completed"}'),
    ("DELETE /api/tasks/{id}", "Delete a task", None),
]


def render_index(title: str) -> str:
    blocks = []
    for route, summary, example in _ENDPOINTS:
        body = f"<br>Body: <code>{example}</code>" if example else ""
        blocks.append(f'<div class="endpoint"><strong>{route}</strong> - {summary}{body}</div>')
    endpoints_html = "\n".join(blocks)
    return f"""<!DOCTYPE html>
<html>
<head>
  <title>{title}</title>
  <style>
    body {{ font-family: Arial; max-width: 800px; margin: 50px auto; padding: 20px; }}
    h1 {{ color: #0078d4; }}
    .endpoint {{ background: #f5f5f5; padding: 10px; margin: 10px 0; border-left: 4px solid #0078d4; }}
    code {{ background: #e0e0e0; padding: 2px 6px; border-radius: 3px; }}
  </style>
</head>
<body>
  <h1>{title}</h1>
  <h2>Available endpoints</h2>
{endpoints_html}
</body>
</html>
"""


@router.get("/", response_class=HTMLResponse)
def index(config: ConfigDep) -> str:
    return render_index(config.api_name)
