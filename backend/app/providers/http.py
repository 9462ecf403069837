from __future__ import annotations

import gzip
import json
import socket
import zlib
from http.client import HTTPException
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from app.errors import ProviderError


def build_url(base_url: str, path: str, params: dict[str, str] | None = None) -> str:
    url = f"{base_url.rstrip('/')}{path}"
    if params:
        url = f"{url}?{urlencode(params)}"
    return url


def _timeout_message(timeout: float) -> str:
    return f"timeout of {int(timeout * 1000)}ms exceeded"


def _decode_body(raw: bytes, content_encoding: str | None) -> str:
    encoding = (content_encoding or "").strip().lower()
    if encoding == "gzip":
        raw = gzip.decompress(raw)
    elif encoding == "deflate":
        try:
            raw = zlib.decompress(raw)
        except zlib.error:
            # Some servers send raw deflate without the zlib header.
            raw = zlib.decompress(raw, -zlib.MAX_WBITS)
    return raw.decode("utf-8")


def _read_json(label: str, request: Request, timeout: float):
    try:
        with urlopen(request, timeout=timeout) as response:
            body = _decode_body(response.read(), response.headers.get("Content-Encoding"))
        return json.loads(body)
    except HTTPError as exc:
        raise ProviderError(label, f"Request failed with status code {exc.code}") from exc
    except URLError as exc:
        if isinstance(exc.reason, (TimeoutError, socket.timeout)):
            raise ProviderError(label, _timeout_message(timeout)) from exc
        raise ProviderError(label, str(exc.reason)) from exc
    except (TimeoutError, socket.timeout) as exc:
        raise ProviderError(label, _timeout_message(timeout)) from exc
    except (OSError, HTTPException) as exc:
        raise ProviderError(label, str(exc) or exc.__class__.__name__) from exc
    except (zlib.error, EOFError) as exc:
        raise ProviderError(label, f"Invalid compressed response: {exc}") from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ProviderError(label, f"Invalid JSON response: {exc}") from exc


def get_json(label: str, url: str, headers: dict[str, str] | None = None, timeout: float = 10):
    request = Request(url, headers={"Accept": "application/json", **(headers or {})})
    return _read_json(label, request, timeout)


def post_json(
    label: str,
    url: str,
    payload: dict,
    headers: dict[str, str] | None = None,
    timeout: float = 15,
):
    data = json.dumps(payload).encode("utf-8")
    request = Request(
        url,
        data=data,
        headers={"Content-Type": "application/json", **(headers or {})},
        method="POST",
    )
    return _read_json(label, request, timeout)
