"""
Analizador de estructura (estrategia "estructura")
==================================================
Detecta qué secciones tiene un sitio, las compara con las que el catálogo
espera para el rubro y servicio, recomienda las que faltan y pide a la IA
un resumen narrativo de la estructura.

Puntaje: 60 puntos por la proporción de secciones esperadas encontradas y
40 por la proporción de secciones requeridas encontradas.
"""

import os
import logging

import ai_client
import web_catalog
from errors import UpstreamError, NarrativeGenerationError
from web_analyzer import AnalysisStrategy

logger = logging.getLogger(__name__)

STRUCTURE_TIMEOUT_SECONDS = int(os.environ.get("STRUCTURE_TIMEOUT_SECONDS", "15"))

MIN_TOKEN_LEN = 3
SUMMARY_CHARS = 200
SUMMARY_ELEMENTS = 3
CONTENIDO_NO_DISPONIBLE = 'Contenido no disponible'


def seccion(nombre, descripcion, found, content_summary=None, recommendations=None):
    data = {'name': nombre, 'description': descripcion, 'found': found}
    if content_summary is not None:
        data['content_summary'] = content_summary
    if recommendations is not None:
        data['recommendations'] = recommendations
    return data


def _coincide(a, b):
    a, b = a.lower(), b.lower()
    return a in b or b in a


def detect_sections_by_content(html_lower):
    tokens = []
    for palabras, token in web_catalog.CONTENT_KEYWORDS:
        if any(p in html_lower for p in palabras):
            tokens.append(token)
    return tokens


def extract_section_content(soup, token):
    def contiene_token(tag):
        clases = ' '.join(tag.get('class') or []).lower()
        return token in clases or token in (tag.get('id') or '').lower()

    partes = []
    for tag in soup.find_all(contiene_token, limit=SUMMARY_ELEMENTS):
        texto = ' '.join(tag.get_text(' ').split())
        if texto:
            partes.append(texto[:SUMMARY_CHARS] + '...')
    return ' '.join(partes) or CONTENIDO_NO_DISPONIBLE


def section_recommendations(nombre, contenido):
    contenido = contenido.lower()
    recomendaciones = []
    if nombre == 'Inicio (Home)':
        if 'slider' not in contenido and 'carousel' not in contenido:
            recomendaciones.append('Agregar slider de imágenes o videos destacados')
        if 'formulario' not in contenido:
            recomendaciones.append('Incluir formulario de contacto o cotización')
    elif nombre == 'Proyectos':
        if 'filtro' not in contenido:
            recomendaciones.append('Implementar filtros de búsqueda avanzados')
        if 'galería' not in contenido:
            recomendaciones.append('Agregar galería de imágenes de proyectos')
    elif nombre == 'Contacto':
        if 'mapa' not in contenido:
            recomendaciones.append('Incluir mapa de ubicación')
        if 'teléfono' not in contenido and 'email' not in contenido:
            recomendaciones.append('Agregar información de contacto completa')
    return recomendaciones


def detect_existing_sections(pagina):
    detectados = []
    for token in pagina.nav_links() + detect_sections_by_content(pagina.html_lower):
        if len(token) >= MIN_TOKEN_LEN and token not in detectados:
            detectados.append(token)

    secciones = []
    nombres = set()
    for token in detectados:
        nombre = web_catalog.SECTION_MAPPINGS.get(token, token)
        if nombre in nombres:
            continue
        nombres.add(nombre)
        contenido = extract_section_content(pagina.soup, token)
        secciones.append(seccion(
            nombre,
            web_catalog.describe_section(nombre),
            True,
            content_summary=contenido,
            recommendations=section_recommendations(nombre, contenido),
        ))
    return secciones


def _esta_presente(esperada, existentes):
    return any(_coincide(s['name'], esperada.nombre) for s in existentes)


def analyze_missing_sections(existentes, esperadas):
    faltantes = []
    for esperada in esperadas:
        if _esta_presente(esperada, existentes):
            continue
        recomendaciones = [
            f'Implementar sección "{esperada.nombre}"',
            f'Agregar contenido relevante: {esperada.descripcion}',
        ]
        if esperada.requerida:
            recomendaciones.append('Esta sección es crítica para el sector seleccionado')
        faltantes.append(seccion(esperada.nombre, esperada.descripcion, False, recommendations=recomendaciones))
    return faltantes


def generate_recommended_sections(solicitud, existentes, faltantes):
    recomendadas = [s for s in faltantes if web_catalog.is_critical_section(s['name'], solicitud.rubro)]
    nombres = {s['name'] for s in recomendadas}

    for adicional in web_catalog.get_additional_sections(solicitud.rubro, solicitud.servicio):
        if adicional.nombre in nombres:
            continue
        if any(adicional.nombre.lower() in s['name'].lower() for s in existentes):
            continue
        nombres.add(adicional.nombre)
        recomendadas.append(seccion(
            adicional.nombre,
            adicional.descripcion,
            False,
            recommendations=[f'Implementar {adicional.nombre} para mejorar la experiencia del usuario'],
        ))
    return recomendadas


def calculate_structure_score(existentes, esperadas):
    """Entero en [0, 100]; cada término vale 0 si no hay secciones que medir."""
    requeridas = [e for e in esperadas if e.requerida]
    encontradas = [e for e in esperadas if _esta_presente(e, existentes)]
    requeridas_encontradas = [e for e in encontradas if e.requerida]

    basico = 60 * len(encontradas) / len(esperadas) if esperadas else 0
    critico = 40 * len(requeridas_encontradas) / len(requeridas) if requeridas else 0
    return int(basico + critico + 0.5)


def extract_page_content(pagina):
    soup = pagina.soup
    partes = [f"Título: {pagina.title}"]

    descripcion = pagina.meta_content('description')
    if descripcion:
        partes.append(f"Descripción: {descripcion}")

    navegacion = ' '.join(' '.join(t.get_text(' ').split()) for t in soup.select('nav, .nav, .menu, header'))
    if navegacion:
        partes.append(f"Navegación: {navegacion[:500]}")

    principal = ' '.join(' '.join(t.get_text(' ').split()) for t in soup.select('main, .main, .content, .container'))
    if principal:
        partes.append(f"Contenido principal: {principal[:1000]}")

    partes.append(f"Formularios encontrados: {len(soup.find_all('form'))}")
    enlaces = [a.get_text().strip() for a in soup.find_all('a')]
    partes.append(f"Enlaces de navegación: {', '.join([e for e in enlaces if e][:20])}")
    partes.append(f"Imágenes encontradas: {len(soup.find_all('img'))}")
    return "\n\n".join(partes)


def build_narrative_prompt(solicitud, contenido, existentes, faltantes):
    secciones = [(s, 'encontrada') for s in existentes] + [(s, 'faltante') for s in faltantes]
    listado = "\n".join(f"- {s['name']}: {s['description']} ({estado})" for s, estado in secciones)
    return f"""Analiza el contenido de esta página web y genera un análisis de estructura web para el sector {solicitud.rubro} y servicio {solicitud.servicio}.

CONTENIDO DE LA PÁGINA:
{contenido}

TODAS LAS SECCIONES (ENCONTRADAS Y FALTANTES):
{listado}

Genera un análisis estructurado en este formato exacto:

1. [Nombre de la sección]:
[Descripción de lo que contiene o debería contener la sección]
[Otra característica de la sección]

2. [Otra sección]:
[Descripción de lo que contiene o debería contener la sección]

IMPORTANTE:
- No uses iconos ni puntuaciones
- No distingas en el texto entre secciones encontradas y faltantes
- Incluye todas las secciones relevantes para el sector
- Para las secciones encontradas describe lo que realmente contienen; para las faltantes, lo que deberían contener
- No inventes contenido que no esté en el análisis de la página

Genera solo el análisis estructurado, sin introducciones ni conclusiones."""


def generate_overall_analysis(solicitud, contenido, existentes, faltantes):
    prompt = build_narrative_prompt(solicitud, contenido, existentes, faltantes)
    try:
        return ai_client.generate_text(prompt, temperature=0.1, max_tokens=4000)
    except UpstreamError as e:
        logger.error(f"NARRATIVE_FAIL | url={solicitud.url} | error={e.message}")
        raise NarrativeGenerationError()


def generate_fallback_analysis(solicitud):
    esperadas = web_catalog.get_expected_sections(solicitud.rubro, solicitud.servicio)
    return {
        'url': solicitud.url,
        'title': 'Análisis no disponible',
        'existing_sections': [],
        'missing_sections': [
            seccion(e.nombre, e.descripcion, False,
                    recommendations=[f'Implementar {e.nombre} para mejorar la estructura del sitio'])
            for e in esperadas
        ],
        'recommended_sections': [
            seccion(e.nombre, e.descripcion, False,
                    recommendations=[f'Agregar {e.nombre} como sección esencial'])
            for e in esperadas
        ],
        'overall_analysis': (
            f"No se pudo analizar la estructura de {solicitud.url}. Se recomienda implementar las "
            f"secciones estándar para el sector {solicitud.rubro.lower()}."
        ),
        'score': 0,
    }


class EstructuraStrategy(AnalysisStrategy):
    nombre = 'estructura'
    timeout = STRUCTURE_TIMEOUT_SECONDS

    def analyze(self, pagina, solicitud):
        esperadas = web_catalog.get_expected_sections(solicitud.rubro, solicitud.servicio)
        existentes = detect_existing_sections(pagina)
        faltantes = analyze_missing_sections(existentes, esperadas)
        recomendadas = generate_recommended_sections(solicitud, existentes, faltantes)
        score = calculate_structure_score(existentes, esperadas)

        logger.info(f"STRUCTURE_DONE | url={pagina.url} | found={len(existentes)} | missing={len(faltantes)} | score={score}")
        overall = generate_overall_analysis(solicitud, extract_page_content(pagina), existentes, faltantes)

        return {
            'url': pagina.url,
            'title': pagina.title,
            'existing_sections': existentes,
            'missing_sections': faltantes,
            'recommended_sections': recomendadas,
            'overall_analysis': overall,
            'score': score,
        }

    def fallback(self, solicitud):
        return generate_fallback_analysis(solicitud)
