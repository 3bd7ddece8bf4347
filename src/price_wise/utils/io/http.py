from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional, Dict, Any, Protocol
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


class HttpTransport(Protocol):
    def get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response: ...

    def post(
        self,
        url: str,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response: ...


@dataclass(frozen=True)
class HTTPConfig:
    """
    Config do transporte HTTP.

    - max_retries=0 => uma única tentativa por request (WDS não precisa de retry aqui).
    - pool_maxsize: tamanho do pool de conexões de cada sessão.

    O transporte é compartilhado pelas threads do agregador, mas cada
    thread usa a sua própria requests.Session (Session não é thread-safe).
    """
    timeout_sec: int = 30
    max_retries: int = 0
    backoff_sec: float = 0.0
    pool_maxsize: int = 32
    headers: Optional[Dict[str, str]] = None


class RequestsTransport:
    def __init__(self, cfg: HTTPConfig):
        self.cfg = cfg
        self._local = threading.local()

    def _new_session(self) -> requests.Session:
        session = requests.Session()
        retries = Retry(
            total=self.cfg.max_retries,
            backoff_factor=self.cfg.backoff_sec,
            status_forcelist=(429, 500, 502, 503, 504),
            allowed_methods=("GET", "POST"),
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retries, pool_maxsize=self.cfg.pool_maxsize)
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        return session

    @property
    def session(self) -> requests.Session:
        # uma sessão por thread, criada sob demanda
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._new_session()
            self._local.session = session
        return session

    def get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        h = headers or self.cfg.headers
        return self.session.get(url, params=params, headers=h, timeout=self.cfg.timeout_sec)

    def post(
        self,
        url: str,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        h = {**(self.cfg.headers or {}), "Content-Type": "application/json", **(headers or {})}
        return self.session.post(url, json=json, headers=h, timeout=self.cfg.timeout_sec)
