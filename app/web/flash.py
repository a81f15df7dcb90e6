from fastapi import Request

FLASH_KEY = "flash"


def set_flash(request: Request, message: str, category: str = "success"):
    request.session[FLASH_KEY] = {"message": message, "category": category}


def pop_flash(request: Request) -> dict | None:
    return request.session.pop(FLASH_KEY, None)
