"""Development entry point."""

import uvicorn

from promptsmith.config import settings

if __name__ == "__main__":
    uvicorn.run("promptsmith.main:app", host=settings.host, port=settings.port, reload=True)
