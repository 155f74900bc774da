"""Shared test fixtures for the desymcp test suite."""

from __future__ import annotations

import pytest

from desymcp.config import DEFAULT_INDEX_URL
from desymcp.errors import DesyError, ErrorCode
from desymcp.models.catalog import Catalog
from desymcp.parser import parse_index

INDEX_URL = DEFAULT_INDEX_URL

SAMPLE_INDEX = """\
# DESY - Sistema de diseño del Gobierno de Aragón

> Librería de componentes y guías de estilo.

- [Introducción](https://desy.aragon.es/componente-intro-codigo): Primeros pasos

## Componentes

- [Botón](https://desy.aragon.es/componente-boton-codigo): Botones para acciones
- [Botón (angular)](https://desy.aragon.es/componente-boton-angular): Botón en Angular
- [Botón (nunjucks)](https://desy.aragon.es/componente-boton-nunjucks): Macro Nunjucks del botón
- [Modal](https://desy.aragon.es/componente-modal-codigo): Ventanas modales
- [Tabla avanzada](https://desy.aragon.es/componente-tabla-avanzada-codigo): Tablas con filtros
- [Guía de estilo](https://desy.aragon.es/estilos): Not a component
- Texto sin enlace

### Formularios

- [Campo de texto](https://desy.aragon.es/componente-campo-texto-codigo): Entrada de texto
  - [Pista](/componente-pista-codigo.md): Texto de ayuda
- [Desplegable props](https://desy.aragon.es/componente-desplegable-props): Propiedades del desplegable

## Accesibilidad

- [Enlace de salto](https://desy.aragon.es/componente-enlace-salto-codigo)
"""

BOTON_PAGE = """\
# Botón

Los botones permiten a los usuarios realizar acciones.

```html
<p>Example before any heading</p>
```

### Primario

```html
<button class="c-button">Primario</button>
```

```nunjucks
{{ desyButton({ text: "Primario" }) }}
```

### Deshabilitado #

```html
<button class="c-button" disabled>Deshabilitado</button>
```

```ts
<desy-button [disabled]="true">Deshabilitado</desy-button>
```

### Sin código

Este bloque no tiene ejemplos.
"""

BOTON_PROPS_PAGE = """\
# Botón: propiedades

| Nombre | Tipo | Descripción |
| --- | --- | --- |
| text | string | Texto del botón |
| disabled | boolean | Deshabilita el botón |
"""


class FakeFetcher:
    """In-memory FetcherProtocol implementation that records every call."""

    def __init__(self, pages: dict[str, str] | None = None) -> None:
        self.pages = dict(pages or {})
        self.calls: list[str] = []

    async def fetch(self, url: str) -> str:
        self.calls.append(url)
        if url not in self.pages:
            raise DesyError(
                code=ErrorCode.PAGE_FETCH_FAILED,
                message=f"HTTP 503 fetching {url}",
                suggestion="Try again later.",
                recoverable=True,
            )
        return self.pages[url]


@pytest.fixture()
def sample_index() -> str:
    return SAMPLE_INDEX


@pytest.fixture()
def catalog(sample_index: str) -> Catalog:
    """Catalog parsed from SAMPLE_INDEX."""
    return parse_index(sample_index)


@pytest.fixture()
def fake_fetcher(sample_index: str) -> FakeFetcher:
    return FakeFetcher({INDEX_URL: sample_index})


@pytest.fixture()
def boton_page() -> str:
    return BOTON_PAGE


@pytest.fixture()
def boton_props_page() -> str:
    return BOTON_PROPS_PAGE
