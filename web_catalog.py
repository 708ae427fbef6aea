"""
Catálogo sectorial
==================
Secciones que se esperan en un sitio según el rubro del cliente y el tipo
de servicio cotizado, más las tablas de palabras clave que usan los
analizadores. Es un conjunto cerrado: se valida al importar el módulo.
"""

from dataclasses import dataclass

RUBROS = ('Inmobiliario', 'Retail', 'Financiero')
SERVICIOS = ('Landing', 'E-Commerce', 'Aplicación', 'Web Multiproyecto')


@dataclass(frozen=True)
class SeccionEsperada:
    nombre: str
    descripcion: str
    requerida: bool = True


_S = SeccionEsperada

SECTOR_SECTIONS = {
    ('Inmobiliario', 'Landing'): (
        _S('Inicio (Home)', 'Página principal con cabecera, slider de imágenes, proyectos destacados, filtro de búsqueda y formulario de cotización'),
        _S('Nosotros', 'Historia de la empresa, valores, filosofía, línea de tiempo de proyectos y formulario de cotización'),
        _S('Proyectos', 'Galería de proyectos con filtros avanzados y páginas individuales con detalles específicos'),
        _S('Detalle del Proyecto', 'Slider del proyecto, presentación, detalles iconográficos, avances de obra, galerías, recorrido virtual, mapa y formulario de cotización'),
        _S('Vende tu Terreno', 'Captación de terrenos: beneficios, pasos a seguir y formulario de datos del propietario', False),
        _S('Refiere y Gana', 'Programa de referidos con premios, condiciones y formulario de registro', False),
        _S('Contacto', 'Formulario de cotización, información de contacto y ubicación'),
    ),
    ('Inmobiliario', 'E-Commerce'): (
        _S('Catálogo de Propiedades', 'Lista completa de propiedades con filtros avanzados, búsqueda y comparación'),
        _S('Sistema de Reservas', 'Proceso de reserva online con pasarela de pagos y confirmación'),
        _S('Panel de Usuario', 'Dashboard personalizado para gestionar reservas, favoritos y preferencias'),
        _S('Comparador de Propiedades', 'Herramienta para comparar varias propiedades lado a lado'),
        _S('Chat en Vivo', 'Atención al cliente en tiempo real'),
        _S('Sistema de Favoritos', 'Guardar propiedades favoritas para revisarlas después'),
    ),
    ('Inmobiliario', 'Aplicación'): (
        _S('Búsqueda Geolocalizada', 'Búsqueda de propiedades por ubicación con GPS'),
        _S('Notificaciones Push', 'Alertas sobre nuevas propiedades y ofertas especiales'),
        _S('Realidad Aumentada', 'Visualización de propiedades en AR', False),
        _S('Sincronización Offline', 'Acceso a datos sin conexión'),
        _S('Sistema de Mensajería', 'Chat interno con asesores'),
        _S('Calendario de Citas', 'Agendar visitas a propiedades'),
    ),
    ('Retail', 'E-Commerce'): (
        _S('Catálogo de Productos', 'Lista completa de productos con categorías y filtros'),
        _S('Carrito de Compras', 'Carrito con gestión de productos y cantidades'),
        _S('Pasarela de Pagos', 'Varios métodos de pago seguros'),
        _S('Sistema de Inventario', 'Control de stock en tiempo real'),
        _S('Programa de Lealtad', 'Sistema de puntos y recompensas', False),
        _S('Reviews y Ratings', 'Reseñas y calificaciones de productos'),
        _S('Wishlist', 'Lista de deseos personalizada'),
    ),
    ('Retail', 'Landing'): (
        _S('Inicio (Home)', 'Página principal con productos destacados y llamadas a la acción'),
        _S('Catálogo de Productos', 'Productos destacados con galería'),
        _S('Ofertas y Promociones', 'Sección de ofertas especiales'),
        _S('Newsletter', 'Suscripción para ofertas exclusivas'),
        _S('Testimonios', 'Opiniones de clientes satisfechos'),
        _S('Comparador de Precios', 'Comparación de precios con la competencia', False),
        _S('FAQ Section', 'Preguntas frecuentes'),
        _S('Contacto', 'Formulario de contacto, teléfono y ubicación de tiendas'),
    ),
    ('Financiero', 'Landing'): (
        _S('Inicio (Home)', 'Página principal con propuesta de valor y accesos a productos financieros'),
        _S('Calculadoras Financieras', 'Herramientas para calcular préstamos, intereses y cuotas'),
        _S('Simuladores de Crédito', 'Simulación de distintos tipos de crédito'),
        _S('Información de Servicios', 'Descripción detallada de productos financieros'),
        _S('Testimonios de Confianza', 'Casos de éxito y testimonios de clientes'),
        _S('Certificaciones de Seguridad', 'Información sobre seguridad y regulaciones'),
        _S('Centro de Ayuda', 'FAQ y soporte al cliente'),
        _S('Chat Especializado', 'Atención personalizada para consultas financieras'),
        _S('Contacto', 'Canales de atención, agencias y formulario de contacto'),
    ),
    ('Financiero', 'Aplicación'): (
        _S('Dashboard Personalizado', 'Vista general de productos y servicios financieros'),
        _S('Autenticación 2FA', 'Seguridad de dos factores'),
        _S('Historial de Transacciones', 'Registro completo de movimientos'),
        _S('Alertas y Notificaciones', 'Notificaciones de movimientos y ofertas'),
        _S('Reportes Financieros', 'Generación de reportes personalizados'),
        _S('Soporte Multimoneda', 'Operaciones en distintas monedas', False),
        _S('Backup de Seguridad', 'Respaldo seguro de información'),
    ),
}

# Palabras clave para detectar una sección esperada en enlaces o HTML
PAGE_KEYWORDS = {
    'Inicio (Home)': ('inicio', 'home', 'principal'),
    'Nosotros': ('nosotros', 'about', 'sobre', 'empresa'),
    'Proyectos': ('proyectos', 'projects', 'propiedades', 'properties'),
    'Detalle del Proyecto': ('detalle', 'proyecto', 'propiedad'),
    'Vende tu Terreno': ('vende', 'terreno', 'referidos'),
    'Refiere y Gana': ('refiere', 'gana', 'blog', 'noticias'),
    'Contacto': ('contacto', 'contact', 'comunícate'),
    'Catálogo de Propiedades': ('catálogo', 'catalogo', 'propiedades', 'properties'),
    'Sistema de Reservas': ('reservas', 'reservar', 'booking'),
    'Panel de Usuario': ('panel', 'usuario', 'mi cuenta', 'dashboard'),
    'Comparador de Propiedades': ('comparador', 'comparar'),
    'Chat en Vivo': ('chat', 'vivo', 'ayuda'),
    'Sistema de Favoritos': ('favoritos', 'guardar', 'wishlist'),
    'Búsqueda Geolocalizada': ('geolocalizada', 'ubicación', 'mapa'),
    'Notificaciones Push': ('notificaciones', 'push', 'alertas'),
    'Realidad Aumentada': ('realidad', 'aumentada', 'ar'),
    'Sincronización Offline': ('offline', 'sincronización'),
    'Sistema de Mensajería': ('mensajería', 'mensajes', 'chat'),
    'Calendario de Citas': ('calendario', 'citas', 'agendar'),
    'Catálogo de Productos': ('catálogo', 'catalogo', 'productos', 'products'),
    'Carrito de Compras': ('carrito', 'compras', 'cart'),
    'Pasarela de Pagos': ('pagos', 'payment', 'checkout'),
    'Sistema de Inventario': ('inventario', 'stock'),
    'Programa de Lealtad': ('lealtad', 'puntos', 'recompensas'),
    'Reviews y Ratings': ('reviews', 'ratings', 'opiniones'),
    'Wishlist': ('wishlist', 'deseos', 'favoritos'),
    'Ofertas y Promociones': ('ofertas', 'promociones', 'descuentos'),
    'Newsletter': ('newsletter', 'suscribirse', 'email'),
    'Testimonios': ('testimonios', 'opiniones', 'clientes'),
    'Comparador de Precios': ('comparador', 'precios'),
    'FAQ Section': ('faq', 'preguntas', 'frecuentes'),
    'Calculadoras Financieras': ('calculadora', 'calculator', 'financiera'),
    'Simuladores de Crédito': ('simulador', 'crédito', 'préstamo'),
    'Información de Servicios': ('servicios', 'services', 'información'),
    'Testimonios de Confianza': ('testimonios', 'confianza', 'casos'),
    'Certificaciones de Seguridad': ('certificaciones', 'seguridad', 'ssl'),
    'Centro de Ayuda': ('ayuda', 'help', 'soporte'),
    'Chat Especializado': ('chat', 'especializado', 'asesor'),
    'Dashboard Personalizado': ('dashboard', 'personalizado', 'panel'),
    'Autenticación 2FA': ('2fa', 'autenticación', 'seguridad'),
    'Historial de Transacciones': ('historial', 'transacciones', 'movimientos'),
    'Alertas y Notificaciones': ('alertas', 'notificaciones'),
    'Reportes Financieros': ('reportes', 'financieros'),
    'Soporte Multimoneda': ('multimoneda', 'monedas'),
    'Backup de Seguridad': ('backup', 'respaldo', 'seguridad'),
}

# Token detectado (enlace de navegación o palabra clave) -> sección estándar
SECTION_MAPPINGS = {
    'inicio': 'Inicio (Home)',
    'home': 'Inicio (Home)',
    'nosotros': 'Nosotros',
    'about': 'Nosotros',
    'proyectos': 'Proyectos',
    'projects': 'Proyectos',
    'propiedades': 'Proyectos',
    'properties': 'Proyectos',
    'contacto': 'Contacto',
    'contact': 'Contacto',
    'blog': 'Blog',
    'noticias': 'Blog',
    'news': 'Blog',
    'productos': 'Catálogo de Productos',
    'products': 'Catálogo de Productos',
    'catalogo': 'Catálogo de Productos',
    'catalog': 'Catálogo de Productos',
    'servicios': 'Servicios',
    'services': 'Servicios',
    'calculadora': 'Calculadoras Financieras',
    'calculator': 'Calculadoras Financieras',
    'simulador': 'Simuladores de Crédito',
    'simulator': 'Simuladores de Crédito',
    'carrito': 'Carrito de Compras',
    'cart': 'Carrito de Compras',
    'pagos': 'Pasarela de Pagos',
    'checkout': 'Pasarela de Pagos',
    'payment': 'Pasarela de Pagos',
}

# Búsqueda en el HTML completo: (palabras, token resultante)
CONTENT_KEYWORDS = (
    (('formulario', 'contact'), 'contacto'),
    (('proyecto', 'propiedad'), 'proyectos'),
    (('nosotros', 'about'), 'nosotros'),
    (('blog', 'noticia'), 'blog'),
    (('calculadora', 'simulador'), 'calculadora'),
    (('producto', 'catalogo'), 'productos'),
)

SECTION_DESCRIPTIONS = {
    'Inicio (Home)': 'Página principal con navegación y contenido destacado',
    'Nosotros': 'Información sobre la empresa, historia y valores',
    'Proyectos': 'Galería y detalles de proyectos o productos',
    'Contacto': 'Información de contacto y formularios',
    'Blog': 'Artículos y noticias del sector',
    'Catálogo de Productos': 'Lista de productos o servicios disponibles',
    'Calculadoras Financieras': 'Herramientas de cálculo financiero',
    'Simuladores de Crédito': 'Simuladores de préstamos y créditos',
    'Carrito de Compras': 'Carrito para reunir productos antes de pagar',
    'Pasarela de Pagos': 'Proceso de pago en línea',
}

CRITICAL_SECTIONS = {
    'Inmobiliario': ('Inicio (Home)', 'Proyectos', 'Contacto'),
    'Retail': ('Catálogo de Productos', 'Contacto'),
    'Financiero': ('Calculadoras Financieras', 'Contacto'),
}

ADDITIONAL_BY_RUBRO = {
    'Inmobiliario': (
        _S('Vende tu Terreno', 'Captación de terrenos de propietarios', False),
        _S('Refiere y Gana', 'Programa de referidos inmobiliarios', False),
    ),
}

ADDITIONAL_BY_SERVICIO = {
    'E-Commerce': (
        _S('Carrito de Compras', 'Sistema de compras online', False),
        _S('Pasarela de Pagos', 'Métodos de pago seguros', False),
    ),
}


def get_expected_sections(rubro, servicio):
    """Secciones esperadas; tupla vacía para combinaciones sin catálogo."""
    return SECTOR_SECTIONS.get((rubro, servicio), ())


def get_expected_pages(rubro, servicio):
    return [s.nombre for s in get_expected_sections(rubro, servicio)]


def get_additional_sections(rubro, servicio):
    return ADDITIONAL_BY_RUBRO.get(rubro, ()) + ADDITIONAL_BY_SERVICIO.get(servicio, ())


def is_critical_section(nombre, rubro):
    nombre = nombre.lower()
    return any(critica.lower() in nombre for critica in CRITICAL_SECTIONS.get(rubro, ()))


def describe_section(nombre):
    return SECTION_DESCRIPTIONS.get(nombre, f"Sección {nombre}")


def validate_catalog():
    for (rubro, servicio), secciones in SECTOR_SECTIONS.items():
        if rubro not in RUBROS:
            raise ValueError(f"Rubro desconocido en el catálogo: {rubro}")
        if servicio not in SERVICIOS:
            raise ValueError(f"Servicio desconocido en el catálogo: {servicio}")
        nombres = [s.nombre for s in secciones]
        if len(nombres) != len(set(nombres)):
            raise ValueError(f"Secciones duplicadas en {rubro}/{servicio}")
        for nombre in nombres:
            if nombre not in PAGE_KEYWORDS:
                raise ValueError(f"Sin palabras clave para la sección: {nombre}")
    for rubro in CRITICAL_SECTIONS:
        if rubro not in RUBROS:
            raise ValueError(f"Rubro desconocido en secciones críticas: {rubro}")


validate_catalog()
