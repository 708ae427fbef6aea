"""
Tests del crawler básico (estrategia heurística) y del flujo común de
descarga y respaldo.
"""

import pytest
import requests

import web_analyzer
from web_analyzer import SolicitudAnalisis, analizar, analizar_con_respaldo, fetch_page, normalize_url
from web_crawler import CrawlerStrategy, calculate_overall_score
from errors import UpstreamError


# ============================================================================
# FIXTURES
# ============================================================================

RELLENO = " ".join(["contenido"] * 400)

HTML_COMPLETO = f"""
<html>
<head>
  <title>Constructora Andina</title>
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <meta name="description" content="Departamentos en Lima">
  <meta name="keywords" content="departamentos, lima">
  <link rel="stylesheet" href="/css/bootstrap.min.css">
  <script src="https://www.google-analytics.com/analytics.js"></script>
</head>
<body>
  <header>
    <nav>
      <a href="/">Inicio</a>
      <a href="/nosotros">Nosotros</a>
      <a href="/proyectos">Proyectos</a>
      <a href="/contacto">Contacto</a>
    </nav>
  </header>
  <h1>Vive mejor</h1>
  <img src="a.jpg" alt="Fachada"><img src="b.jpg" alt="Sala">
  <p>{RELLENO}</p>
  <div class="testimonial">Excelente atención</div>
  <form><input type="text"><button>Enviar</button><button>Llamar</button></form>
  <footer>Síguenos en facebook</footer>
</body>
</html>
"""

HTML_POBRE = """
<html>
<head><title></title></head>
<body>
  <h1>Hola</h1>
  <img src="a.jpg">
  <p>Poco texto</p>
</body>
</html>
"""


class FakeResponse:
    def __init__(self, text, status_code=200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


@pytest.fixture
def fake_get(monkeypatch):
    llamadas = []

    def instalar(html, status_code=200):
        def fake(url, headers=None, timeout=None):
            llamadas.append({"url": url, "headers": headers, "timeout": timeout})
            return FakeResponse(html, status_code)
        monkeypatch.setattr(requests, "get", fake)
        return llamadas

    return instalar


SOLICITUD = {"url": "constructora.pe", "rubro": "Inmobiliario", "servicio": "Landing", "tipo": "Básico"}


# ============================================================================
# DESCARGA
# ============================================================================

class TestFetch:

    def test_normalize_url(self):
        assert normalize_url("ejemplo.com") == "https://ejemplo.com"
        assert normalize_url("http://ejemplo.com") == "http://ejemplo.com"
        assert normalize_url("https://ejemplo.com") == "https://ejemplo.com"

    def test_sends_browser_user_agent_and_timeout(self, fake_get):
        llamadas = fake_get(HTML_POBRE)
        fetch_page("ejemplo.com", 10)
        assert llamadas[0]["url"] == "https://ejemplo.com"
        assert "Mozilla/5.0" in llamadas[0]["headers"]["User-Agent"]
        assert llamadas[0]["timeout"] == 10

    def test_http_error_becomes_upstream_error(self, fake_get):
        fake_get("", status_code=404)
        with pytest.raises(UpstreamError):
            fetch_page("ejemplo.com", 10)

    def test_network_error_becomes_upstream_error(self, monkeypatch):
        def falla(*args, **kwargs):
            raise requests.ConnectionError("sin red")

        monkeypatch.setattr(requests, "get", falla)
        with pytest.raises(UpstreamError):
            fetch_page("ejemplo.com", 10)


# ============================================================================
# ESTRATEGIA HEURÍSTICA
# ============================================================================

class TestCrawlerStrategy:

    def test_complete_page_scores_100(self, fake_get):
        fake_get(HTML_COMPLETO)
        data = analizar(SOLICITUD, CrawlerStrategy())

        assert data["url"] == "https://constructora.pe"
        assert data["title"] == "Constructora Andina"
        assert data["description"] == "Departamentos en Lima"
        assert data["seo_analysis"]["has_alt_texts"] is True
        assert data["design_analysis"]["is_responsive"] is True
        assert data["design_analysis"]["has_modern_design"] is True
        assert data["technical_analysis"] == {
            "has_ssl": True,
            "has_contact_forms": True,
            "has_social_media": True,
            "has_analytics": True,
        }
        assert data["content_analysis"]["content_quality"] == "Contenido básico"
        assert "Testimonios" in data["content_analysis"]["engagement_elements"]
        assert data["overall_score"] == 100

    def test_missing_pages_from_catalog(self, fake_get):
        fake_get(HTML_COMPLETO)
        data = analizar(SOLICITUD, CrawlerStrategy())
        assert data["missing_features"] == ["Vende tu Terreno", "Refiere y Gana"]
        assert any("Vende tu Terreno" in r for r in data["recommendations"])
        assert "• Vende tu Terreno" in data["detailed_analysis"]
        assert "Puntuación obtenida: 100/100 puntos" in data["detailed_analysis"]

    def test_poor_page(self, fake_get):
        fake_get(HTML_POBRE)
        data = analizar(dict(SOLICITUD, url="http://pobre.pe"), CrawlerStrategy())

        assert data["title"] == "Sin título"
        assert data["seo_analysis"]["has_alt_texts"] is False
        assert data["content_analysis"]["content_quality"] == "Contenido insuficiente"
        assert data["technical_analysis"]["has_ssl"] is False
        assert "No se detectó un sistema de navegación claro" in data["design_analysis"]["navigation_issues"]
        assert "Implementar certificado SSL para mayor seguridad" in data["recommendations"]
        # Solo suma el h1: 6.25
        assert data["overall_score"] == 6

    def test_page_without_images_passes_alt_check(self, fake_get):
        fake_get("<html><body><p>texto</p></body></html>")
        data = analizar(SOLICITUD, CrawlerStrategy())
        assert data["seo_analysis"]["has_alt_texts"] is True

    def test_score_weights(self):
        seo = {"has_meta_description": True, "has_h1_tags": True, "has_alt_texts": False, "has_meta_keywords": False}
        design = {"is_responsive": True, "has_modern_design": False}
        content = {"content_quality": "Contenido adecuado"}
        technical = {"has_ssl": True, "has_contact_forms": False, "has_analytics": False}
        # 12.5 + 12.5 + 25 + 8.33 = 58.33
        assert calculate_overall_score(seo, design, content, technical) == 58


class TestFallback:

    def test_unreachable_site_returns_fallback(self, monkeypatch):
        def falla(*args, **kwargs):
            raise requests.Timeout("timeout")

        monkeypatch.setattr(requests, "get", falla)
        data, success = analizar_con_respaldo(SOLICITUD, CrawlerStrategy())

        assert success is False
        assert data["overall_score"] == 0
        assert data["title"] == "Análisis no disponible"
        assert data["content_analysis"]["content_quality"] == "No evaluado"
        assert data["missing_features"][0] == "Inicio (Home)"

    def test_empty_url_returns_fallback(self):
        data, success = analizar_con_respaldo(dict(SOLICITUD, url=""), CrawlerStrategy())
        assert success is False
        assert data["overall_score"] == 0

    def test_success_flag(self, fake_get):
        fake_get(HTML_COMPLETO)
        data, success = analizar_con_respaldo(SolicitudAnalisis.from_dict(SOLICITUD), CrawlerStrategy())
        assert success is True
        assert data["overall_score"] == 100
