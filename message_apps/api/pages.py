import logging
from pathlib import Path
from urllib.parse import quote

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from message_apps.api.deps import get_auth_service
from message_apps.exceptions import MessageAppsError
from message_apps.services import AuthService

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

router = APIRouter()

@router.get("/", response_class=HTMLResponse)
async def home(request: Request):
    return templates.TemplateResponse(request, "home.html")

@router.get("/login", response_class=HTMLResponse)
async def login_page(request: Request, registered: bool = False):
    return templates.TemplateResponse(request, "login.html", {"registered": registered})

@router.get("/register", response_class=HTMLResponse)
async def register_page(request: Request, error: str = None):
    return templates.TemplateResponse(request, "register.html", {"error": error})

@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard_page(request: Request):
    return templates.TemplateResponse(request, "dashboard.html")

@router.post("/register")
async def register_form(
    username: str = Form(...),
    email: str = Form(...),
    password: str = Form(..., alias="passwordHash"),
    auth_service: AuthService = Depends(get_auth_service)
):
    logger.info(f"User registration form submission for username: {username}")
    try:
        await auth_service.register(username, email, password)
    except MessageAppsError as e:
        logger.error(f"Error during form registration: {e.message}")
        return RedirectResponse(f"/register?error={quote(e.message)}", status_code=status.HTTP_303_SEE_OTHER)

    return RedirectResponse("/login?registered=true", status_code=status.HTTP_303_SEE_OTHER)
