import uvicorn

from pasties.config import get_settings
from pasties.main import create_app


def main():
    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
