import os

DEFAULT_ORIGINS = "http://localhost:8080,http://localhost:3000,https://movies.com,https://midu.dev"


def _split(value):
    return [item.strip() for item in value.split(",") if item.strip()]


class Config:
    HOST = os.getenv('HOST', '0.0.0.0')
    PORT = int(os.getenv('PORT', '3000'))

    ALLOWED_ORIGINS = _split(os.getenv('ALLOWED_ORIGINS', DEFAULT_ORIGINS))

    MOVIES_FILE = os.getenv(
        'MOVIES_FILE',
        os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data', 'movies.json')
    )

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_JSON = os.getenv('LOG_JSON', 'False').lower() == 'true'
