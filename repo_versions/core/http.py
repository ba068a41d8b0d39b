import requests
from requests.adapters import HTTPAdapter, Retry

from .. import __version__

UA = f"repo-versions/{__version__}"

def make_session(user_agent: str = UA, retries_total: int = 2) -> requests.Session:
    retries = Retry(
        total=retries_total, backoff_factor=0.3,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=frozenset(["GET", "HEAD"]),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retries, pool_connections=10, pool_maxsize=10)
    s = requests.Session()
    s.mount("http://", adapter); s.mount("https://", adapter)
    s.headers.update({"User-Agent": user_agent})
    return s

SESSION = make_session()
