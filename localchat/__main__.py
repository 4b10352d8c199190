"""Run the server: python -m localchat"""

import uvicorn

from localchat.api.main import create_app
from localchat.configs import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.server.host, port=settings.server.port)


if __name__ == "__main__":
    main()
