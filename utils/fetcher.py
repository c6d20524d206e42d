import requests
from config import REQUEST_TIMEOUT, USER_AGENT

is_url = lambda location: location.lower().startswith(('http://', 'https://'))


def http_fetch(url: str, timeout: int = REQUEST_TIMEOUT) -> str:
    """Fetch raw HTML from a URL (no JS rendering)

    Raises:
        requests.RequestException: on connection errors or non-2xx status
    """
    response = requests.get(url, timeout=timeout, headers={'User-Agent': USER_AGENT})
    response.raise_for_status()
    # requests assumes ISO-8859-1 for text/html without a charset
    if 'charset' not in response.headers.get('Content-Type', '').lower():
        response.encoding = response.apparent_encoding
    return response.text
