"""Fetching web content and working out the public IP address."""

from __future__ import annotations

import locale
import urllib.error
import urllib.request

__all__ = [
    "FetchError",
    "json_value_simple",
    "fetch_url",
    "parse_ip_page",
    "get_internet_ip",
    "get_internet_ip2",
]

IP_PAGE_URL = "https://ip.cn/"
IP_JSON_URL_V4 = "https://v4.yinghualuo.cn/bejson"
IP_JSON_URL_V6 = "https://v6.yinghualuo.cn/bejson"
USER_AGENT_PREFIX = "TrafficMeter/"

_IP_MIN_LEN = 7
_IP_MAX_LEN = 15


class FetchError(Exception):
    """Raised when a URL cannot be fetched or does not answer with status 200."""


def json_value_simple(json_str, name):
    """Pull the raw text of the value named name out of a flat JSON string.

    Returns an empty string if the name or its colon cannot be found.
    """
    index = json_str.find(f'"{name}"')
    if index < 0:
        return ""
    index = json_str.find(":", index + 1)
    if index < 0:
        return ""
    start = next(
        (i for i in range(index + 1, len(json_str)) if json_str[i] not in '" '),
        None,
    )
    if start is None:
        return ""
    end = next(
        (i for i in range(start, len(json_str)) if json_str[i] in '",]}\r\n'),
        len(json_str),
    )
    return json_str[start:end]


def fetch_url(url, utf8=False, user_agent=""):
    """Fetch url and return its body as text with line breaks removed.

    Raises FetchError if the request fails or the status is not 200.
    """
    headers = {"User-Agent": user_agent} if user_agent else {}
    request = urllib.request.Request(url, headers=headers)
    try:
        with urllib.request.urlopen(request) as response:
            status = getattr(response, "status", None)
            if status is None:
                status = response.getcode()
            if status != 200:
                raise FetchError(f"{url}: HTTP status {status}")
            body = response.read()
    except urllib.error.URLError as exc:
        raise FetchError(f"{url}: {exc.reason}") from exc
    except OSError as exc:
        raise FetchError(f"{url}: {exc}") from exc
    content = b"".join(body.splitlines())
    encoding = "utf-8" if utf8 else locale.getpreferredencoding(False)
    return content.decode(encoding, errors="replace")


def parse_ip_page(web_page, global_location=False):
    """Extract (ip_address, ip_location) from the IP lookup page."""
    index = web_page.find("<code>")
    index1 = web_page.find("</code>", index + 6 if index >= 0 else 5)
    if index < 0 or index1 < 0:
        ip_address = ""
    else:
        ip_address = web_page[index + 6:index1]
    if not _IP_MIN_LEN <= len(ip_address) <= _IP_MAX_LEN:
        ip_address = ""

    start = index1 + 7 if index1 >= 0 else 6
    if global_location:
        index = web_page.find("GeoIP", start)
        index1 = web_page.find("</p>", index + 6) if index >= 0 else -1
        offset = 7
    else:
        index = web_page.find("<code>", start)
        index1 = web_page.find("</code>", index + 6) if index >= 0 else -1
        offset = 6
    if index < 0 or index1 < 0:
        ip_location = ""
    else:
        ip_location = web_page[index + offset:index1]
    return ip_address, ip_location


def get_internet_ip(global_location=False):
    """Look up the public IP address and its location from the IP page.

    Returns empty strings if the page cannot be fetched.
    """
    try:
        page = fetch_url(IP_PAGE_URL, utf8=True)
    except FetchError:
        return "", ""
    return parse_ip_page(page, global_location)


def get_internet_ip2(ipv6=False, version=""):
    """Look up the public IP address and its location from the JSON service.

    Returns empty strings if the service cannot be reached.
    """
    url = IP_JSON_URL_V6 if ipv6 else IP_JSON_URL_V4
    try:
        raw = fetch_url(url, utf8=True, user_agent=USER_AGENT_PREFIX + version)
    except FetchError:
        return "", ""
    return json_value_simple(raw, "ip"), json_value_simple(raw, "location")