from pathlib import Path

from fastapi.templating import Jinja2Templates

from app.core.settings import settings
from app.version import APP_VERSION

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "templates"
STATIC_DIR = BASE_DIR / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

# Globais comuns a TODO o app
templates.env.globals.update(
    {
        "app_name": "Dapodik Siswa",
        "app_version": APP_VERSION,
        "app_env": settings.APP_ENV.value,
    }
)


def render(request, name: str, context: dict, status_code: int = 200):
    """Atalho: garante 'request' no contexto e retorna TemplateResponse."""
    context.setdefault("request", request)
    return templates.TemplateResponse(
        request, name, context, status_code=status_code
    )
