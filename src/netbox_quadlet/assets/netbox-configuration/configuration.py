# NetBox settings read from the container environment (see env/netbox.env).
# Secrets that are not environment variables live in extra.py.

from os import environ


def _environ_get_and_map(variable_name, default=None, map_fn=None):
    env_value = environ.get(variable_name, default)
    if env_value is None:
        return env_value
    if not map_fn:
        return env_value
    return map_fn(env_value)


def _is_true(value):
    return value.lower() == "true"


ALLOWED_HOSTS = environ.get("ALLOWED_HOSTS", "*").split(" ")

DATABASE = {
    "NAME": environ.get("DB_NAME", "netbox"),
    "USER": environ.get("DB_USER", ""),
    "PASSWORD": environ.get("DB_PASSWORD", ""),
    "HOST": environ.get("DB_HOST", "localhost"),
    "PORT": environ.get("DB_PORT", ""),
    "CONN_MAX_AGE": _environ_get_and_map("DB_CONN_MAX_AGE", "300", int),
}

REDIS = {
    "tasks": {
        "HOST": environ.get("REDIS_HOST", "localhost"),
        "PORT": _environ_get_and_map("REDIS_PORT", 6379, int),
        "USERNAME": environ.get("REDIS_USERNAME", ""),
        "PASSWORD": environ.get("REDIS_PASSWORD", ""),
        "DATABASE": _environ_get_and_map("REDIS_DATABASE", 0, int),
        "SSL": _environ_get_and_map("REDIS_SSL", "False", _is_true),
    },
    "caching": {
        "HOST": environ.get("REDIS_CACHE_HOST", environ.get("REDIS_HOST", "localhost")),
        "PORT": _environ_get_and_map("REDIS_CACHE_PORT", environ.get("REDIS_PORT", 6379), int),
        "USERNAME": environ.get("REDIS_CACHE_USERNAME", ""),
        "PASSWORD": environ.get("REDIS_CACHE_PASSWORD", ""),
        "DATABASE": _environ_get_and_map("REDIS_CACHE_DATABASE", 1, int),
        "SSL": _environ_get_and_map("REDIS_CACHE_SSL", "False", _is_true),
    },
}

SECRET_KEY = environ.get("SECRET_KEY", "")

CORS_ORIGIN_ALLOW_ALL = _environ_get_and_map("CORS_ORIGIN_ALLOW_ALL", "False", _is_true)
GRAPHQL_ENABLED = _environ_get_and_map("GRAPHQL_ENABLED", "True", _is_true)
METRICS_ENABLED = _environ_get_and_map("METRICS_ENABLED", "False", _is_true)
MEDIA_ROOT = environ.get("MEDIA_ROOT", "/opt/netbox/netbox/media")
RELEASE_CHECK_URL = environ.get("RELEASE_CHECK_URL", None)
TIME_ZONE = environ.get("TIME_ZONE", "UTC")

EMAIL = {
    "SERVER": environ.get("EMAIL_SERVER", "localhost"),
    "PORT": _environ_get_and_map("EMAIL_PORT", 25, int),
    "USERNAME": environ.get("EMAIL_USERNAME", ""),
    "PASSWORD": environ.get("EMAIL_PASSWORD", ""),
    "USE_SSL": _environ_get_and_map("EMAIL_USE_SSL", "False", _is_true),
    "USE_TLS": _environ_get_and_map("EMAIL_USE_TLS", "False", _is_true),
    "TIMEOUT": _environ_get_and_map("EMAIL_TIMEOUT", 10, int),
    "FROM_EMAIL": environ.get("EMAIL_FROM", ""),
}
