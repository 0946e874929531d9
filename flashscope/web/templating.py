from pathlib import Path

from fastapi.templating import Jinja2Templates

from flashscope.version import APP_VERSION

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

# Globais comuns a todo o app
templates.env.globals.update({"app_version": APP_VERSION})


def get_templates() -> Jinja2Templates:
    """Dependency opcional (caso prefira Depends)."""
    return templates


def render(request, name: str, context: dict):
    """Atalho: garante 'request' e o flash da requisição no contexto."""
    context.setdefault("request", request)
    flash = getattr(request.state, "flash", None)
    if flash is not None:
        context.setdefault("flash", flash.current())
        context.setdefault("alert", flash.alert)
        context.setdefault("notice", flash.notice)
    return templates.TemplateResponse(request, name, context)
