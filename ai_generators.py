"""
Generadores de texto asistidos por IA
=====================================
Tiempo de desarrollo, requerimientos técnicos y descripción del proyecto
para la propuesta comercial. Cada generador consulta primero la IA y, si
falla, responde con un texto fijo que no depende de la red.
"""

import re
import logging

import ai_client
from errors import UpstreamError

logger = logging.getLogger(__name__)

MAX_REQUERIMIENTOS = 5

REQUERIMIENTOS_RESPALDO = (
    "Diseño responsive para dispositivos móviles",
    "Optimización de velocidad de carga",
    "Integración con Google Analytics",
    "Certificado SSL de seguridad",
    "Sistema de gestión de contenido",
)

TIEMPO_MESES = (
    "• El proyecto tiene una duración estimada de 3 meses (90 días calendario)\n"
    "• División en sprints de 2 semanas cada uno\n"
    "• Entregables cada 15 días con revisiones y ajustes\n"
    "• Seguimiento continuo del progreso del proyecto"
)
TIEMPO_SEMANAS = (
    "• El proyecto tiene una duración estimada de 8-12 semanas\n"
    "• Entregables semanales con revisiones continuas\n"
    "• Cada fase incluye presentación de avances\n"
    "• Ajustes según requerimientos del cliente"
)
TIEMPO_DIAS = (
    "• El proyecto tiene una duración estimada de 60-90 días calendario\n"
    "• Entregables quincenales con seguimiento continuo\n"
    "• Revisión del progreso en tiempo real\n"
    "• Ajustes según feedback del cliente"
)
TIEMPO_DEFECTO = (
    "• El proyecto tendrá un tiempo de desarrollo de 3 meses o 90 días calendario\n"
    "• División en sprints de 2 semanas cada uno\n"
    "• Entregables cada 15 días con revisiones\n"
    "• Ajustes según el feedback del cliente"
)

DESCRIPCIONES_PROYECTO = {
    ('Inmobiliario', 'Landing'): (
        "En el sector inmobiliario, una landing page bien estructurada es la vitrina principal de cada proyecto. "
        "Presenta los departamentos disponibles, los avances de obra y la ubicación, y convierte visitas en "
        "solicitudes de cotización mediante formularios visibles en cada sección."
    ),
    ('Inmobiliario', 'E-Commerce'): (
        "En el sector inmobiliario, una plataforma de comercio electrónico permite a los compradores explorar el "
        "catálogo de propiedades, compararlas y separar una unidad en línea con pago seguro, acortando el ciclo "
        "de venta y dando al equipo comercial información en tiempo real sobre el interés de cada cliente."
    ),
    ('Inmobiliario', 'Aplicación'): (
        "En el sector inmobiliario, una aplicación móvil acompaña al comprador durante todo el proceso: búsqueda "
        "geolocalizada, alertas de nuevas propiedades, mensajería con asesores y agenda de visitas, fortaleciendo "
        "la relación con la marca después de la primera consulta."
    ),
    ('Inmobiliario', 'Web Multiproyecto'): (
        "En el sector inmobiliario, una web multiproyecto reúne todos los desarrollos de la empresa bajo una misma "
        "marca, con fichas independientes por proyecto, filtros por distrito y precio, y formularios de cotización "
        "que distribuyen cada contacto al equipo de ventas correspondiente."
    ),
    ('Retail', 'Landing'): (
        "En el sector retail, una landing page orientada a campañas destaca productos, ofertas y promociones de "
        "temporada, captura suscriptores para el newsletter y dirige el tráfico hacia los canales de venta con "
        "llamadas a la acción claras."
    ),
    ('Retail', 'E-Commerce'): (
        "En el sector retail, una tienda en línea completa integra catálogo con filtros, carrito de compras, "
        "pasarela de pagos e inventario sincronizado, permitiendo vender las 24 horas y medir el comportamiento "
        "de compra para optimizar cada campaña."
    ),
    ('Retail', 'Aplicación'): (
        "En el sector retail, una aplicación móvil convierte a los clientes frecuentes en compradores recurrentes "
        "mediante notificaciones de ofertas, programa de puntos y un proceso de compra optimizado para el "
        "teléfono."
    ),
    ('Financiero', 'Landing'): (
        "En el sector financiero, una landing page transmite confianza desde el primer contacto: calculadoras y "
        "simuladores de crédito, información clara de cada producto, certificaciones de seguridad y canales de "
        "atención especializados que convierten consultas en solicitudes."
    ),
    ('Financiero', 'Aplicación'): (
        "En el sector financiero, una aplicación segura con autenticación de dos factores ofrece a los clientes "
        "un panel personalizado, historial de transacciones, alertas de movimientos y reportes, reduciendo la "
        "carga de los canales presenciales."
    ),
}

_VINETA = re.compile(r'^\s*(?:[-•·]+|\d+[.)])\s*')


def fallback_tiempo_desarrollo(texto):
    descripcion = (texto or '').lower()
    if 'mes' in descripcion or 'month' in descripcion:
        return TIEMPO_MESES
    if 'semana' in descripcion or 'week' in descripcion:
        return TIEMPO_SEMANAS
    if 'día' in descripcion or 'dia' in descripcion or 'day' in descripcion:
        return TIEMPO_DIAS
    return TIEMPO_DEFECTO


def fallback_requerimientos(requerimientos=None, rubro=None, servicio=None):
    return "\n".join(REQUERIMIENTOS_RESPALDO)


def fallback_descripcion_proyecto(rubro, servicio):
    descripcion = DESCRIPCIONES_PROYECTO.get((rubro, servicio))
    if descripcion:
        return descripcion
    return (
        f"En el sector {(rubro or '').lower()}, la implementación de {(servicio or '').lower()} representa "
        "una oportunidad para fortalecer la presencia digital de la empresa, mejorar la experiencia de sus "
        "clientes y generar nuevas oportunidades de negocio con una solución a medida."
    )


def limpiar_requerimientos(texto):
    """Quita asteriscos y viñetas, descarta líneas vacías y limita a 5 ítems."""
    lineas = []
    for linea in (texto or '').replace('*', '').splitlines():
        linea = _VINETA.sub('', linea).strip()
        if linea:
            lineas.append(linea)
    return "\n".join(lineas[:MAX_REQUERIMIENTOS])


def analizar_tiempo_desarrollo(texto):
    prompt = f"""Analiza la siguiente descripción de tiempo de desarrollo de un proyecto web y genera una versión profesional y estructurada para la sección de condiciones de contrato.

Descripción del usuario: "{texto}"

Incluye:
1. Duración estimada en días/meses
2. División en fases o sprints si aplica
3. Entregables por fase
4. Consideraciones sobre variaciones de tiempo

Responde solo con el texto estructurado, sin introducciones ni explicaciones adicionales."""
    try:
        return ai_client.generate_text(prompt, temperature=0.4, max_tokens=800)
    except UpstreamError as e:
        logger.warning(f"TIEMPO_FALLBACK | error={e.message}")
        return fallback_tiempo_desarrollo(texto)


def mejorar_requerimientos(requerimientos, rubro=None, servicio=None):
    prompt = f"""Reescribe el requerimiento original como una lista de máximo 5 ítems, más formal y profesional, manteniendo el mismo contenido. El requerimiento es para una web o app del rubro {rubro or 'general'} (servicio: {servicio or 'web'}).

Requerimiento original: "{requerimientos}"

Ejemplo:
Requerimiento original: que se vea bonito y atractivo
Respuesta:
{fallback_requerimientos()}

NO DEVUELVAS SALUDOS, SOLO LA LISTA SOLICITADA, SIN GUIONES."""
    try:
        texto = ai_client.generate_text(prompt, temperature=0.4, max_tokens=500)
    except UpstreamError as e:
        logger.warning(f"REQUERIMIENTOS_FALLBACK | error={e.message}")
        return fallback_requerimientos(requerimientos, rubro, servicio)

    limpio = limpiar_requerimientos(texto)
    if not limpio:
        logger.warning("REQUERIMIENTOS_FALLBACK | error=empty_after_cleanup")
        return fallback_requerimientos(requerimientos, rubro, servicio)
    return limpio


def generar_descripcion_proyecto(rubro, servicio):
    prompt = f"""Redacta un párrafo profesional (máximo 90 palabras) para una propuesta comercial que explique el valor de desarrollar un proyecto de tipo "{servicio}" para una empresa del sector "{rubro}".

Empieza con "En el sector {(rubro or '').lower()}," y no uses viñetas, títulos ni saludos."""
    try:
        return ai_client.generate_text(prompt, temperature=0.7, max_tokens=400)
    except UpstreamError as e:
        logger.warning(f"DESCRIPCION_FALLBACK | error={e.message}")
        return fallback_descripcion_proyecto(rubro, servicio)
