import os

DEFAULT_WORDPRESS_URL = "https://your-wordpress-site.com"
DEFAULT_BASE_URL = "https://agr.codes"
DEFAULT_SITE_NAME = "agr.codes"
DEFAULT_SITE_DESCRIPTION = (
    "Reflexiones sobre desarrollo web, diseño y tecnología"
)
DEFAULT_TIMEOUT_S = 10.0


def _env(name: str) -> str | None:
    raw = (os.environ.get(name) or "").strip()
    return raw or None


def get_wordpress_url() -> str:
    return (_env("WORDPRESS_URL") or DEFAULT_WORDPRESS_URL).rstrip("/")


def get_wordpress_api_url() -> str:
    """Root of the WordPress REST API (``/wp-json/wp/v2``)."""
    return f"{get_wordpress_url()}/wp-json/wp/v2"


def get_base_url() -> str:
    return (_env("BASE_URL") or DEFAULT_BASE_URL).rstrip("/")


def get_site_name() -> str:
    return _env("SITE_NAME") or DEFAULT_SITE_NAME


def get_site_description() -> str:
    return _env("SITE_DESCRIPTION") or DEFAULT_SITE_DESCRIPTION


def get_wordpress_timeout_s() -> float:
    raw = _env("WORDPRESS_TIMEOUT_S")
    if raw is None:
        return DEFAULT_TIMEOUT_S
    try:
        return float(raw)
    except ValueError:
        return DEFAULT_TIMEOUT_S
