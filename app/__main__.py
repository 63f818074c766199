import uvicorn

from app.core.config import settings

if __name__ == "__main__":
    # Port defaults to 3000; override with PORT=...
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
