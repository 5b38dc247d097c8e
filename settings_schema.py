from pydantic import BaseModel, ValidationError

from config import APP_VERSION, DEFAULT_STORAGE_KEY


class SettingsSchema(BaseModel):
    storage_key: str = DEFAULT_STORAGE_KEY
    show_safety_tips: bool = True
    show_disclaimer: bool = True
    language: str = "en"
    theme: str = "light"
    app_version: str = APP_VERSION


def validate_settings(data: dict) -> None:
    try:
        SettingsSchema(**data)
    except ValidationError as e:
        raise ValueError(str(e))


def default_settings() -> dict:
    return SettingsSchema().model_dump()
