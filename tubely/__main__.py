import uvicorn
from tubely.config import get_settings

settings = get_settings()

uvicorn.run("tubely.main:app", host=settings.host, port=settings.port, log_level=settings.log_level)
