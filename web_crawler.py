"""
Crawler básico (estrategia "heuristica")
========================================
Evaluación determinística de una página: SEO, diseño, contenido y aspectos
técnicos, cada bloque con el 25 % del puntaje. El informe detallado se
arma con plantillas de texto, sin consultar la IA.
"""

import os
import logging

import web_catalog
from web_analyzer import AnalysisStrategy

logger = logging.getLogger(__name__)

CRAWLER_TIMEOUT_SECONDS = int(os.environ.get("CRAWLER_TIMEOUT_SECONDS", "10"))

MODERN_FRAMEWORKS = ('bootstrap', 'tailwind', 'material', 'chakra')
SOCIAL_PLATFORMS = ('facebook', 'twitter', 'instagram', 'linkedin', 'youtube')
ANALYTICS_SERVICES = ('google-analytics', 'gtag', 'ga(', 'facebook pixel')
COMMON_SECTIONS = ('about', 'sobre', 'contacto', 'contact', 'services', 'servicios')

CALIDAD_INSUFICIENTE = 'Contenido insuficiente'


def analyze_page_speed(soup):
    issues = []
    if len(soup.find_all('script')) > 10:
        issues.append('Exceso de scripts JavaScript que pueden afectar la velocidad de carga')
    if len(soup.find_all('img')) > 20:
        issues.append('Gran cantidad de imágenes sin optimizar')
    if len(soup.select('link[rel="stylesheet"]')) > 5:
        issues.append('Varios archivos CSS externos que pueden ralentizar la carga')
    return issues


def has_alt_texts(soup):
    imagenes = soup.find_all('img')
    if not imagenes:
        return True
    con_alt = [img for img in imagenes if img.has_attr('alt')]
    return len(con_alt) >= len(imagenes) * 0.8


def is_responsive(pagina):
    if pagina.meta_content('viewport'):
        return True
    return any('@media' in style.get_text() for style in pagina.soup.find_all('style'))


def has_modern_design(html_lower):
    return any(framework in html_lower for framework in MODERN_FRAMEWORKS)


def analyze_navigation(soup):
    issues = []
    if not soup.select('nav, .nav, .navigation, .menu'):
        issues.append('No se detectó un sistema de navegación claro')
    if len(soup.select('nav a, .nav a, .menu a')) > 10:
        issues.append('Demasiados elementos en el menú principal')
    return issues


def analyze_ux(soup):
    issues = []
    if len(soup.select('button, .btn, input[type="submit"]')) < 2:
        issues.append('Pocos elementos de llamada a la acción (CTA)')
    if not soup.find('footer'):
        issues.append('Falta información de contacto en el footer')
    return issues


def content_quality(soup):
    cuerpo = soup.body or soup
    palabras = len(cuerpo.get_text(' ').split())
    if palabras < 300:
        return CALIDAD_INSUFICIENTE
    if palabras < 800:
        return 'Contenido básico'
    if palabras < 1500:
        return 'Contenido adecuado'
    return 'Contenido extenso'


def find_missing_common_sections(html_lower):
    return [f"Sección {seccion}" for seccion in COMMON_SECTIONS if seccion not in html_lower]


def find_engagement_elements(soup):
    elementos = []
    if soup.find('form'):
        elementos.append('Formularios de contacto')
    if soup.select('.testimonial, .review'):
        elementos.append('Testimonios')
    if soup.select('.social, .share'):
        elementos.append('Redes sociales')
    if soup.select('video, iframe[src*="youtube"]'):
        elementos.append('Contenido multimedia')
    return elementos


def find_missing_pages(pagina, expected_pages):
    html_lower = pagina.html_lower
    enlaces = pagina.nav_links()
    faltantes = []
    for page in expected_pages:
        keywords = web_catalog.PAGE_KEYWORDS.get(page, (page.lower(),))
        en_navegacion = any(k in enlace for enlace in enlaces for k in keywords)
        en_contenido = any(k in html_lower for k in keywords)
        if not en_navegacion and not en_contenido:
            faltantes.append(page)
    return faltantes


def generate_recommendations(seo, design, content, technical, missing_pages, solicitud):
    recomendaciones = []
    if not seo['has_meta_description']:
        recomendaciones.append('Agregar meta descripción optimizada para SEO')
    if not design['is_responsive']:
        recomendaciones.append('Implementar diseño responsive para dispositivos móviles')
    if content['content_quality'] == CALIDAD_INSUFICIENTE:
        recomendaciones.append('Ampliar el contenido con información relevante del sector')
    if not technical['has_ssl']:
        recomendaciones.append('Implementar certificado SSL para mayor seguridad')
    if missing_pages:
        recomendaciones.append(
            f"Agregar páginas/secciones específicas para {solicitud.rubro}: {', '.join(missing_pages[:3])}"
        )
    return recomendaciones


def calculate_overall_score(seo, design, content, technical):
    score = 0.0
    for flag in ('has_meta_description', 'has_h1_tags', 'has_alt_texts', 'has_meta_keywords'):
        if seo[flag]:
            score += 6.25
    if design['is_responsive']:
        score += 12.5
    if design['has_modern_design']:
        score += 12.5
    if content['content_quality'] != CALIDAD_INSUFICIENTE:
        score += 25
    if technical['has_ssl']:
        score += 8.33
    if technical['has_contact_forms']:
        score += 8.33
    if technical['has_analytics']:
        score += 8.34
    return int(score + 0.5)


def _vinetas(items):
    return "\n".join(f"• {item}" for item in items)


def generate_detailed_analysis(solicitud, missing_pages, recomendaciones, score):
    rubro = solicitud.rubro
    faltantes = _vinetas(missing_pages) if missing_pages else '• Su sitio web cuenta con las páginas básicas esperadas'
    return f"""ANÁLISIS DETALLADO DE LA PÁGINA WEB: {solicitud.url}

EVALUACIÓN GENERAL:
Puntuación obtenida: {score}/100 puntos

ANÁLISIS ESPECÍFICO PARA {rubro.upper()} - {solicitud.servicio.upper()}:

La evaluación del sitio web actual muestra oportunidades de mejora para fortalecer su presencia digital en el sector {rubro.lower()}.

FUNCIONALIDADES FALTANTES CRÍTICAS:
{faltantes}

RECOMENDACIONES PRIORITARIAS:
{_vinetas(recomendaciones)}

OPORTUNIDADES DE MEJORA:
• Experiencia de usuario pensada para el sector {rubro}
• Elementos de conversión más efectivos
• Mejor arquitectura de información y navegación
• Herramientas analíticas avanzadas
• Posicionamiento en buscadores con enfoque sectorial

PRÓXIMOS PASOS RECOMENDADOS:
Una renovación del sitio enfocada en las necesidades del sector {rubro} permitirá aprovechar su potencial digital y mejorar la experiencia de sus usuarios.

Implementar las páginas faltantes y las mejoras recomendadas convertirá el sitio en una herramienta competitiva para el crecimiento del negocio."""


def generate_fallback_analysis(solicitud):
    expected_pages = web_catalog.get_expected_pages(solicitud.rubro, solicitud.servicio)
    return {
        'url': solicitud.url,
        'title': 'Análisis no disponible',
        'description': 'No se pudo acceder al sitio web para realizar el análisis',
        'missing_features': expected_pages,
        'recommendations': [
            'Verificar que el sitio web esté accesible',
            'Implementar páginas específicas del sector',
            'Mejorar la estructura y navegación del sitio',
            'Optimizar para dispositivos móviles',
            'Agregar elementos de confianza y credibilidad',
        ],
        'seo_analysis': {
            'has_meta_description': False,
            'has_meta_keywords': False,
            'has_h1_tags': False,
            'has_alt_texts': False,
            'page_speed_issues': ['No se pudo evaluar la velocidad de carga'],
        },
        'design_analysis': {
            'is_responsive': False,
            'has_modern_design': False,
            'navigation_issues': ['No se pudo evaluar la navegación'],
            'ux_issues': ['No se pudo evaluar la experiencia de usuario'],
        },
        'content_analysis': {
            'content_quality': 'No evaluado',
            'missing_sections': ['No se pudo evaluar el contenido'],
            'engagement_elements': [],
        },
        'technical_analysis': {
            'has_ssl': False,
            'has_contact_forms': False,
            'has_social_media': False,
            'has_analytics': False,
        },
        'overall_score': 0,
        'detailed_analysis': f"""ANÁLISIS DEL SITIO WEB: {solicitud.url}

No fue posible acceder al sitio web para realizar un análisis detallado. Puede deberse a:
• El sitio no está disponible públicamente
• Problemas de conectividad temporales
• Restricciones de acceso del servidor

RECOMENDACIONES GENERALES PARA {solicitud.rubro.upper()} - {solicitud.servicio.upper()}:

Según las buenas prácticas del sector {solicitud.rubro.lower()}, se recomienda implementar:

FUNCIONALIDADES ESENCIALES:
{_vinetas(expected_pages)}

ASPECTOS TÉCNICOS FUNDAMENTALES:
• Certificado SSL
• Diseño responsive para dispositivos móviles
• Optimización de velocidad de carga
• Analítica web
• Formularios de contacto optimizados

CONSIDERACIONES DE UX/UI:
• Navegación intuitiva y clara
• Llamadas a la acción efectivas
• Contenido relevante y de calidad
• Elementos de confianza y credibilidad""",
    }


class CrawlerStrategy(AnalysisStrategy):
    nombre = 'heuristica'
    timeout = CRAWLER_TIMEOUT_SECONDS

    def analyze(self, pagina, solicitud):
        soup = pagina.soup
        html_lower = pagina.html_lower
        meta_description = pagina.meta_content('description')

        seo = {
            'has_meta_description': bool(meta_description),
            'has_meta_keywords': bool(pagina.meta_content('keywords')),
            'has_h1_tags': soup.find('h1') is not None,
            'has_alt_texts': has_alt_texts(soup),
            'page_speed_issues': analyze_page_speed(soup),
        }
        design = {
            'is_responsive': is_responsive(pagina),
            'has_modern_design': has_modern_design(html_lower),
            'navigation_issues': analyze_navigation(soup),
            'ux_issues': analyze_ux(soup),
        }
        content = {
            'content_quality': content_quality(soup),
            'missing_sections': find_missing_common_sections(html_lower),
            'engagement_elements': find_engagement_elements(soup),
        }
        technical = {
            'has_ssl': pagina.url.startswith('https://'),
            'has_contact_forms': soup.find('form') is not None,
            'has_social_media': any(p in html_lower for p in SOCIAL_PLATFORMS),
            'has_analytics': any(s in html_lower for s in ANALYTICS_SERVICES),
        }

        expected_pages = web_catalog.get_expected_pages(solicitud.rubro, solicitud.servicio)
        missing_pages = find_missing_pages(pagina, expected_pages)
        recomendaciones = generate_recommendations(seo, design, content, technical, missing_pages, solicitud)
        score = calculate_overall_score(seo, design, content, technical)

        logger.info(f"CRAWL_DONE | url={pagina.url} | score={score} | missing={len(missing_pages)}")
        return {
            'url': pagina.url,
            'title': pagina.title,
            'description': meta_description,
            'missing_features': missing_pages,
            'recommendations': recomendaciones,
            'seo_analysis': seo,
            'design_analysis': design,
            'content_analysis': content,
            'technical_analysis': technical,
            'overall_score': score,
            'detailed_analysis': generate_detailed_analysis(solicitud, missing_pages, recomendaciones, score),
        }

    def fallback(self, solicitud):
        return generate_fallback_analysis(solicitud)
