"""
Analizador web
==============
Descarga y parseo compartidos por las dos estrategias de análisis:

- heuristica (web_crawler.CrawlerStrategy): puntuación SEO/diseño/contenido/técnica.
- estructura (structure_analyzer.EstructuraStrategy): secciones encontradas y faltantes.

El llamador elige la estrategia; analizar_con_respaldo nunca lanza por
fallos de red o de IA, devuelve el análisis de respaldo de la estrategia.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Tuple

import requests
from bs4 import BeautifulSoup

from errors import UpstreamError, ServerError, ValidationError

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

NAV_LINK_SELECTOR = "nav a, .nav a, .menu a, header a"


def _texto(valor):
    return "" if valor is None else str(valor).strip()


@dataclass
class SolicitudAnalisis:
    url: str
    rubro: str = ""
    servicio: str = ""
    tipo: str = ""

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            data = {}
        return cls(
            url=_texto(data.get("url")),
            rubro=_texto(data.get("rubro")),
            servicio=_texto(data.get("servicio")),
            tipo=_texto(data.get("tipo")),
        )


@dataclass
class PaginaWeb:
    url: str
    html: str
    soup: BeautifulSoup

    @property
    def html_lower(self):
        return self.html.lower()

    @property
    def title(self):
        tag = self.soup.find("title")
        texto = tag.get_text().strip() if tag else ""
        return texto or "Sin título"

    def meta_content(self, name):
        tag = self.soup.find("meta", attrs={"name": name})
        return (tag.get("content") or "").strip() if tag else ""

    def nav_links(self):
        """Textos de los enlaces de navegación, en minúsculas y sin espacios extremos."""
        return [a.get_text().strip().lower() for a in self.soup.select(NAV_LINK_SELECTOR)]


class AnalysisStrategy:
    """Interfaz común de las estrategias de análisis."""

    nombre = ""
    timeout = 10

    def analyze(self, pagina: PaginaWeb, solicitud: SolicitudAnalisis) -> Dict[str, Any]:
        raise NotImplementedError

    def fallback(self, solicitud: SolicitudAnalisis) -> Dict[str, Any]:
        raise NotImplementedError


def normalize_url(url):
    url = (url or "").strip()
    if not url.startswith("http://") and not url.startswith("https://"):
        url = "https://" + url
    return url


def fetch_page(url, timeout):
    if not (url or "").strip():
        raise ValidationError("La URL es obligatoria")
    url = normalize_url(url)
    try:
        response = requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        logger.warning(f"FETCH_FAIL | url={url} | error={str(e)}")
        raise UpstreamError(f"No se pudo acceder a {url}")

    logger.info(f"FETCH_OK | url={url} | status={response.status_code} | bytes={len(response.text)}")
    return PaginaWeb(url=url, html=response.text, soup=BeautifulSoup(response.text, "html.parser"))


def analizar(solicitud, estrategia):
    if not isinstance(solicitud, SolicitudAnalisis):
        solicitud = SolicitudAnalisis.from_dict(solicitud)
    pagina = fetch_page(solicitud.url, estrategia.timeout)
    return estrategia.analyze(pagina, solicitud)


def analizar_con_respaldo(solicitud, estrategia) -> Tuple[Dict[str, Any], bool]:
    """(datos, success): en caso de fallo, el respaldo de la estrategia y False."""
    if not isinstance(solicitud, SolicitudAnalisis):
        solicitud = SolicitudAnalisis.from_dict(solicitud)
    try:
        return analizar(solicitud, estrategia), True
    except (UpstreamError, ServerError, ValidationError) as e:
        logger.warning(f"ANALYSIS_FALLBACK | strategy={estrategia.nombre} | url={solicitud.url} | error={e.message}")
        return estrategia.fallback(solicitud), False
