import uvicorn

from crud_gateway.config.settings import get_settings
from crud_gateway.core.logging.builder import setup_logging
from crud_gateway.main import create_app


def main() -> None:
    settings = get_settings()
    setup_logging(settings)

    # log_config=None keeps the dictConfig installed above
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.PORT, log_config=None)


if __name__ == "__main__":
    main()
