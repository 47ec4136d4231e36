"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status
from fastapi.responses import HTMLResponse, Response

if TYPE_CHECKING:
    from protein_exchange.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/exchanges", dependencies=[Depends(require_admin)])
async def kitchen_report(request: Request, day: date = Query(...)) -> dict[str, object]:
    """Return all exchanges for a day with per-protein counts."""
    container: AppContainer = request.app.state.container
    return container.admin_service.kitchen_report(day)


@router.get(
    "/exports/protein-exchanges.csv", dependencies=[Depends(require_admin)]
)
async def export_exchanges(
    request: Request,
    from_: date = Query(alias="from"),
    to: date = Query(...),
) -> Response:
    """Download exchanges between two dates as CSV."""
    container: AppContainer = request.app.state.container
    content = container.admin_service.export_csv(from_, to)
    filename = f"trocas-proteina-{from_.isoformat()}-{to.isoformat()}.csv"
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/menu/refresh", dependencies=[Depends(require_admin)])
async def refresh_menu(request: Request) -> dict[str, object]:
    """Drop cached menus."""
    container: AppContainer = request.app.state.container
    return {"dropped": container.admin_service.refresh_menu()}


@router.get("/ui", response_class=HTMLResponse)
async def admin_ui() -> HTMLResponse:
    """Minimal admin UI that consumes the admin API."""
    return HTMLResponse(_ADMIN_UI_HTML)


_ADMIN_UI_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Protein Exchange Admin</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      .row { margin-bottom: 1rem; }
      input { padding: 0.4rem 0.6rem; width: 320px; }
      button { padding: 0.4rem 0.8rem; margin-right: 0.5rem; }
      pre { background: #f6f6f6; padding: 1rem; overflow: auto; }
    </style>
  </head>
  <body>
    <h1>Protein Exchange Admin</h1>
    <div class="row">
      <label>Admin token</label><br />
      <input id="token" type="password" placeholder="X-Admin-Token" />
    </div>
    <div class="row">
      <label>Day</label><br />
      <input id="day" type="date" />
    </div>
    <div class="row">
      <button onclick="loadReport()">Kitchen report</button>
      <button onclick="refreshMenu()">Refresh menu</button>
    </div>
    <pre id="output">Ready.</pre>
    <script>
      async function call(path, method) {
        const token = document.getElementById('token').value;
        const output = document.getElementById('output');
        output.textContent = 'Loading...';
        const res = await fetch(path, {
          method: method || 'GET',
          headers: { 'X-Admin-Token': token }
        });
        if (!res.ok) {
          output.textContent = 'Error: ' + res.status;
          return;
        }
        const data = await res.json();
        output.textContent = JSON.stringify(data, null, 2);
      }
      function loadReport() {
        const day = document.getElementById('day').value;
        call('/admin/exchanges?day=' + encodeURIComponent(day));
      }
      function refreshMenu() {
        call('/admin/menu/refresh', 'POST');
      }
    </script>
  </body>
</html>
"""
