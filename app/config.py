from pydantic import BaseModel
import os
from pathlib import Path
from dotenv import load_dotenv
load_dotenv()  # carga el archivo .env de la raíz

class Settings(BaseModel):
    app_name: str = os.getenv("APP_NAME", "PetAdopt")
    env: str = os.getenv("APP_ENV", "dev")
    mongodb_uri: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    db_name: str = os.getenv("DB_NAME", "petadopt")
    jwt_secret: str = os.getenv("JWT_SECRET", "change-me")
    jwt_expires_hours: int = int(os.getenv("JWT_EXPIRES_HOURS", "8"))
    media_dir: str = os.getenv("MEDIA_DIR", str(Path(__file__).resolve().parents[1] / "media"))
    frontend_base_url: str = os.getenv("FRONTEND_BASE_URL", "http://localhost:3000")
    # Límite superior para cualquier llamada a los servicios de ciclo de vida
    service_timeout_seconds: float = float(os.getenv("SERVICE_TIMEOUT_SECONDS", "10"))
    max_pictures: int = int(os.getenv("MAX_PICTURES", "5"))
    # Si es True, una petición sin usuario autenticado recibe 401 en vez de usar ""
    require_auth: bool = os.getenv("REQUIRE_AUTH", "false").lower() in ("1", "true", "yes")


_settings: Settings | None = None
def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
        Path(_settings.media_dir).mkdir(parents=True, exist_ok=True)
        Path(_settings.media_dir, "animals").mkdir(parents=True, exist_ok=True)
    return _settings
