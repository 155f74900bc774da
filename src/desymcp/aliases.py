"""Bilingual alias table for DESY component names.

Maps a canonical component key to the names people actually type for it:
Spanish and English, singular and plural, with and without diacritics.
The table is static and read-only; only the resolver consults it.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from desymcp.text import normalise

if TYPE_CHECKING:
    from collections.abc import Mapping

COMPONENT_ALIASES: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "acordeon": ("acordeon", "acordeón", "acordeones", "accordion", "accordions"),
        "alerta": ("alerta", "alertas", "alert", "alerts"),
        "arbol": ("arbol", "árbol", "arboles", "árboles", "tree", "tree view"),
        "area de texto": ("area de texto", "área de texto", "textarea", "text area"),
        "boton": ("boton", "botón", "botones", "button", "buttons", "btn"),
        "buscador": ("buscador", "buscadores", "searchbar", "search bar", "search"),
        "cabecera": ("cabecera", "cabeceras", "header", "headers", "encabezado"),
        "campo de texto": ("campo de texto", "campos de texto", "input", "text input", "inputs"),
        "casilla de verificacion": (
            "casilla de verificacion",
            "casilla de verificación",
            "casillas",
            "checkbox",
            "checkboxes",
        ),
        "colapsable": ("colapsable", "colapsables", "collapsible", "plegable"),
        "desplegable": ("desplegable", "desplegables", "dropdown", "dropdowns"),
        "detalles": ("detalles", "detalle", "details"),
        "dialogo": ("dialogo", "diálogo", "dialogos", "diálogos", "dialog", "dialogs"),
        "enlace de salto": ("enlace de salto", "skip link", "skiplink"),
        "estado": ("estado", "estados", "status"),
        "etiqueta": ("etiqueta", "etiquetas", "label", "labels"),
        "fecha": ("fecha", "fechas", "date input", "date", "campo de fecha"),
        "fieldset": ("fieldset", "fieldsets", "grupo de campos"),
        "grupo de entrada": ("grupo de entrada", "input group"),
        "listado de enlaces": ("listado de enlaces", "lista de enlaces", "links list", "link list"),
        "listbox": ("listbox", "list box", "lista de opciones"),
        "mensaje de error": ("mensaje de error", "mensajes de error", "error message"),
        "menu horizontal": ("menu horizontal", "menú horizontal", "horizontal menu"),
        "menu vertical": ("menu vertical", "menú vertical", "vertical menu"),
        "menubar": ("menubar", "barra de menu", "barra de menú", "menu bar"),
        "migas de pan": ("migas de pan", "miga de pan", "breadcrumbs", "breadcrumb"),
        "modal": ("modal", "modales", "ventana modal", "modal window"),
        "navegacion": ("navegacion", "navegación", "nav", "navigation"),
        "notificacion": ("notificacion", "notificación", "notificaciones", "notification", "notifications"),
        "paginacion": ("paginacion", "paginación", "pagination", "paginador"),
        "panel": ("panel", "paneles", "panels"),
        "pie de pagina": ("pie de pagina", "pie de página", "pie", "footer", "footers"),
        "pildora": ("pildora", "píldora", "pildoras", "píldoras", "pill", "pills"),
        "pista": ("pista", "pistas", "hint", "hints", "texto de ayuda"),
        "radio": ("radio", "radios", "radio button", "radio buttons", "botones de radio"),
        "resumen de errores": ("resumen de errores", "error summary"),
        "select": ("select", "selects", "selector", "selectores"),
        "spinner": ("spinner", "spinners", "cargando", "loader", "loading"),
        "subida de ficheros": (
            "subida de ficheros",
            "subida de archivos",
            "file upload",
            "upload",
        ),
        "tab": ("tab", "tabs", "pestaña", "pestañas", "pestana", "pestanas"),
        "tabla": ("tabla", "tablas", "table", "tables"),
        "tabla avanzada": ("tabla avanzada", "tablas avanzadas", "table advanced", "advanced table"),
        "tarjeta": ("tarjeta", "tarjetas", "card", "cards"),
        "toggle": ("toggle", "toggles", "interruptor", "switch"),
        "tooltip": ("tooltip", "tooltips", "informacion emergente", "información emergente"),
    }
)

# normalised variant → canonical key, built once at import.
_VARIANT_INDEX: Mapping[str, str] = MappingProxyType(
    {
        normalise(variant): canonical
        for canonical, variants in COMPONENT_ALIASES.items()
        for variant in (canonical, *variants)
    }
)


def alias_group_for(term: str) -> str | None:
    """Return the canonical key whose alias group contains ``term``, or None."""
    return _VARIANT_INDEX.get(normalise(term))


def alias_variants(canonical: str) -> tuple[str, ...]:
    """Return the canonical key followed by its variants, or an empty tuple."""
    variants = COMPONENT_ALIASES.get(canonical)
    if variants is None:
        return ()
    return (canonical, *variants)
