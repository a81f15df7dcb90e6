from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from app.deps import get_current_user
from app.models.user import User
from app.web.templating import render

router = APIRouter()


@router.get("/", response_class=HTMLResponse, name="home")
def home(request: Request, current_user: User = Depends(get_current_user)):
    ctx = {"title": "Halaman Home", "current_user": current_user}
    return render(request, "pages/index.html", ctx)


@router.get("/about", response_class=HTMLResponse, name="about")
def about(request: Request, current_user: User = Depends(get_current_user)):
    ctx = {"title": "Halaman About", "current_user": current_user}
    return render(request, "pages/about.html", ctx)
