"""Same-site link filtering for the crawler."""

from urllib.parse import urlparse

# Binary assets that are never worth rendering into the document
SKIP_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".pdf", ".zip")

ALLOWED_SCHEMES = {"http", "https"}


def normalise(url: str) -> str:
    """Strip URL fragment so http://x.com/page#sec and http://x.com/page are the same."""
    return urlparse(url)._replace(fragment="").geturl()


def hostname_of(url: str) -> str:
    """Return the lower-cased hostname of *url*, or an empty string."""
    try:
        return urlparse(url).hostname or ""
    except ValueError:
        return ""


def is_valid_url(url: str, domain: str) -> bool:
    """Return True when *url* is a crawlable page on exactly *domain*.

    The host must match *domain* verbatim: ``www.example.com`` and
    ``example.com`` are different sites. Paths ending in a binary-asset
    extension are rejected regardless of case. Malformed URLs are simply
    not valid; this never raises.
    """
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
    except ValueError:
        return False

    if parsed.scheme not in ALLOWED_SCHEMES or not hostname:
        return False
    if hostname != domain:
        return False
    return not parsed.path.lower().endswith(SKIP_EXTENSIONS)
