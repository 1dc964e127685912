"""
Registration request review routes.
HTML review page for the operator plus a JSON API with the same actions.
"""
import html
from urllib.parse import quote
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse

from ..constants import MESSAGE_APPROVED, MESSAGE_REJECTED, MESSAGE_SUBMITTED
from ..controller import RegisterRequestsController
from ..dependencies import get_controller, get_notification_panel
from ..event_bus import EventLogEntry
from ..exceptions import ReviewError
from ..models import RegistrationRequest, SubmitRequest
from ..notifications import NotificationPanel

logger = logging.getLogger(__name__)

router = APIRouter()

PAGE_PATH = "/admin/register-requests"


def _requests_response(controller: RegisterRequestsController, message: Optional[str] = None) -> JSONResponse:
    body = {
        "status": "ok",
        "data": {
            "requests": controller.to_list(),
            "count": len(controller.requests)
        }
    }
    if message:
        body["message"] = message
    return JSONResponse(body)


# ============= HTML page =============

def render_review_page(requests: List[RegistrationRequest], notifications: List[EventLogEntry]) -> str:
    """Render the review table with one approve/reject form pair per row."""
    esc = html.escape
    rows = []
    for r in requests:
        user = esc(quote(r.username, safe=""), quote=True)
        rows.append(
            "<tr>"
            f"<td>{esc(r.username)}</td>"
            f"<td>{esc(r.email or '')}</td>"
            "<td>"
            f'<form method="post" action="{PAGE_PATH}/{user}/approve" style="display:inline">'
            '<button type="submit" class="approve">Approve</button></form> '
            f'<form method="post" action="{PAGE_PATH}/{user}/reject" style="display:inline">'
            '<button type="submit" class="reject">Reject</button></form>'
            "</td>"
            "</tr>"
        )
    if not rows:
        rows.append('<tr><td colspan="3" class="empty">No pending requests</td></tr>')

    notes = "".join(
        f'<li class="{esc(n.level)}">{esc(n.timestamp.strftime("%H:%M:%S"))} {esc(n.message)}</li>'
        for n in reversed(notifications)
    )

    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>Registration Requests</title>
  <style>
    body {{ font-family: Arial, sans-serif; margin: 2em; background: #f0f0f0; }}
    table {{ border-collapse: collapse; width: 100%; background: #fff; }}
    th {{ background: #48c9b0; color: #fff; text-align: left; }}
    th, td {{ padding: 8px; border: 1px solid #c8c8c8; }}
    li.error {{ color: #c0392b; }}
    li.info {{ color: #1e8449; }}
  </style>
</head>
<body>
  <h1>Registration Requests</h1>
  <ul id="notifications">{notes}</ul>
  <form method="post" action="{PAGE_PATH}/reload"><button type="submit">Reload</button></form>
  <table>
    <thead><tr><th>Username</th><th>Email</th><th>Action</th></tr></thead>
    <tbody>
      {''.join(rows)}
    </tbody>
  </table>
</body>
</html>
"""


@router.get(PAGE_PATH, response_class=HTMLResponse)
async def review_page(
    controller: RegisterRequestsController = Depends(get_controller),
    panel: NotificationPanel = Depends(get_notification_panel),
) -> HTMLResponse:
    return HTMLResponse(content=render_review_page(controller.requests, panel.recent()))


def _back_to_page() -> RedirectResponse:
    return RedirectResponse(url=PAGE_PATH, status_code=303)


@router.post(PAGE_PATH + "/reload")
async def review_page_reload(controller: RegisterRequestsController = Depends(get_controller)):
    try:
        await controller.reload()
    except ReviewError as e:
        # Ошибка уже в ленте уведомлений
        logger.warning(f"Reload from page failed: {e.detail}")
    return _back_to_page()


@router.post(PAGE_PATH + "/{username}/approve")
async def review_page_approve(username: str, controller: RegisterRequestsController = Depends(get_controller)):
    try:
        await controller.approve_displayed(username)
    except ReviewError as e:
        logger.warning(f"Approve from page failed for {username}: {e.detail}")
    return _back_to_page()


@router.post(PAGE_PATH + "/{username}/reject")
async def review_page_reject(username: str, controller: RegisterRequestsController = Depends(get_controller)):
    try:
        await controller.reject_displayed(username)
    except ReviewError as e:
        logger.warning(f"Reject from page failed for {username}: {e.detail}")
    return _back_to_page()


# ============= JSON API =============

@router.get("/api/register-requests")
async def list_requests(controller: RegisterRequestsController = Depends(get_controller)) -> JSONResponse:
    """Currently displayed pending requests, in backend order."""
    return _requests_response(controller)


@router.post("/api/register-requests/reload")
async def reload_requests(controller: RegisterRequestsController = Depends(get_controller)) -> JSONResponse:
    await controller.reload()
    return _requests_response(controller)


@router.post("/api/register-requests/submit")
async def submit_request(
    payload: SubmitRequest,
    controller: RegisterRequestsController = Depends(get_controller),
) -> JSONResponse:
    await controller.submit_request(payload.username, payload.email)
    return JSONResponse({"status": "ok", "message": MESSAGE_SUBMITTED})


@router.post("/api/register-requests/{username}/approve")
async def approve_request(username: str, controller: RegisterRequestsController = Depends(get_controller)) -> JSONResponse:
    await controller.approve_displayed(username)
    return _requests_response(controller, MESSAGE_APPROVED)


@router.post("/api/register-requests/{username}/reject")
async def reject_request(username: str, controller: RegisterRequestsController = Depends(get_controller)) -> JSONResponse:
    await controller.reject_displayed(username)
    return _requests_response(controller, MESSAGE_REJECTED)
